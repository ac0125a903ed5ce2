"""Partially persistent AVL tree of commits.

Each node carries a small modification log (a "fat node"). Writes are
appended to the log while it has room; once it is full the node is
frozen and the write lands on a fresh copy instead. Reads name the
version they want and replay the log up to that version, so every root
handed out by ``insert()`` keeps resolving to the same commits no matter
how many inserts follow.

All functions here are stateless: roots are plain values passed in and
returned. Ownership of roots and version numbers lives in
``minivc.history.CommitLog``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

MAX_MODS = 2
"""Maximum number of entries in a node's modification log."""


@dataclass(frozen=True)
class CommitRecord:
    """An immutable commit payload. ``commit_key`` is also the sort key."""

    commit_key: int
    file_name: str
    diff_data: str = ""
    commit_message: str = ""


class Field(Enum):
    """Node fields that may change after a node is created."""

    LEFT = "left"
    RIGHT = "right"
    HEIGHT = "height"


FieldValue = Union["Node", None, int]


@dataclass(frozen=True)
class Modification:
    """A single logged write: ``field`` became ``value`` at ``version``."""

    version: int
    field: Field
    value: FieldValue


class Node:
    """A tree vertex: baseline fields plus a bounded modification log.

    The baseline children may be shared with other versions. The log is
    append-only and holds at most ``MAX_MODS`` entries in version order.
    """

    __slots__ = ("record", "left", "right", "height", "mods")

    def __init__(
        self,
        record: CommitRecord,
        left: Node | None = None,
        right: Node | None = None,
        height: int = 1,
    ) -> None:
        self.record = record
        self.left = left
        self.right = right
        self.height = height
        self.mods: list[Modification] = []

    @property
    def commit_key(self) -> int:
        return self.record.commit_key

    @property
    def is_full(self) -> bool:
        """True when another write would force a copy."""
        return len(self.mods) >= MAX_MODS

    def __repr__(self) -> str:
        return (
            f"Node(commit_key={self.commit_key}, height={self.height}, "
            f"mods={len(self.mods)})"
        )


# -- Versioned reads --


def _effective(node: Node, field: Field, version: int, base: FieldValue) -> FieldValue:
    result = base
    for mod in node.mods:
        if mod.field is field and mod.version <= version:
            result = mod.value
    return result


def effective_left(node: Node | None, version: int) -> Node | None:
    """Left child of ``node`` as seen at ``version``."""
    if node is None:
        return None
    return _effective(node, Field.LEFT, version, node.left)  # type: ignore[return-value]


def effective_right(node: Node | None, version: int) -> Node | None:
    """Right child of ``node`` as seen at ``version``."""
    if node is None:
        return None
    return _effective(node, Field.RIGHT, version, node.right)  # type: ignore[return-value]


def effective_height(node: Node | None, version: int) -> int:
    """Height of ``node`` as seen at ``version`` (0 for an empty subtree)."""
    if node is None:
        return 0
    return _effective(node, Field.HEIGHT, version, node.height)  # type: ignore[return-value]


def tree_height(root: Node | None, version: int) -> int:
    return effective_height(root, version)


# -- Versioned writes --


def promote(node: Node | None, version: int) -> Node | None:
    """Copy ``node`` into a fresh node with an empty log.

    The copy's baseline holds the node's effective fields at ``version``.
    The source node is left untouched.
    """
    if node is None:
        return None
    return Node(
        node.record,
        left=effective_left(node, version),
        right=effective_right(node, version),
        height=effective_height(node, version),
    )


def _write(node: Node | None, field: Field, value: FieldValue, version: int) -> Node | None:
    """Record ``field = value`` at ``version``; returns the node now holding it."""
    if node is None:
        return None
    if not node.is_full:
        node.mods.append(Modification(version, field, value))
        return node

    fresh = promote(node, version)
    assert fresh is not None
    setattr(fresh, field.value, value)
    return fresh


def set_left(node: Node | None, child: Node | None, version: int) -> Node | None:
    return _write(node, Field.LEFT, child, version)


def set_right(node: Node | None, child: Node | None, version: int) -> Node | None:
    return _write(node, Field.RIGHT, child, version)


def set_height(node: Node | None, height: int, version: int) -> Node | None:
    return _write(node, Field.HEIGHT, height, version)


def _subtree_height(node: Node, version: int) -> int:
    return 1 + max(
        effective_height(effective_left(node, version), version),
        effective_height(effective_right(node, version), version),
    )


def _balance(node: Node, version: int) -> int:
    return effective_height(effective_left(node, version), version) - effective_height(
        effective_right(node, version), version
    )


def _refresh_height(node: Node, version: int) -> Node:
    updated = set_height(node, _subtree_height(node, version), version)
    assert updated is not None
    return updated


# -- Rotations --


def rotate_right(y: Node, version: int) -> Node:
    """Rotate the subtree rooted at ``y`` to the right, as of ``version``.

    The left child is always copied before it becomes the new subtree
    root. Returns the new subtree root.
    """
    x = promote(effective_left(y, version), version)
    assert x is not None, "rotate_right needs a left child"
    t2 = effective_right(x, version)

    new_y = set_left(y, t2, version)
    assert new_y is not None
    new_y = _refresh_height(new_y, version)

    new_x = set_right(x, new_y, version)
    assert new_x is not None
    return _refresh_height(new_x, version)


def rotate_left(x: Node, version: int) -> Node:
    """Mirror image of ``rotate_right``."""
    y = promote(effective_right(x, version), version)
    assert y is not None, "rotate_left needs a right child"
    t2 = effective_left(y, version)

    new_x = set_right(x, t2, version)
    assert new_x is not None
    new_x = _refresh_height(new_x, version)

    new_y = set_left(y, new_x, version)
    assert new_y is not None
    return _refresh_height(new_y, version)


# -- Insertion --


def insert(root: Node | None, version: int, record: CommitRecord) -> Node:
    """Insert ``record`` and return the root for ``version``.

    ``version`` must be greater than every version previously used on
    this tree; callers enforce that (see ``CommitLog.append``). Equal
    keys go to the right, so duplicates keep insertion order.
    """
    if root is None:
        return Node(record)

    # The traversal root is always copied, even if nothing below it changes.
    working = promote(root, version)
    assert working is not None
    key = record.commit_key

    if key < working.commit_key:
        child = insert(effective_left(working, version), version, record)
        working = set_left(working, child, version)
    else:
        child = insert(effective_right(working, version), version, record)
        working = set_right(working, child, version)
    assert working is not None
    working = _refresh_height(working, version)

    balance = _balance(working, version)

    if balance > 1:
        left = effective_left(working, version)
        assert left is not None
        if key < left.commit_key:
            return rotate_right(working, version)
        working = set_left(working, rotate_left(left, version), version)
        assert working is not None
        return rotate_right(working, version)

    if balance < -1:
        right = effective_right(working, version)
        assert right is not None
        if key >= right.commit_key:
            return rotate_left(working, version)
        working = set_right(working, rotate_right(right, version), version)
        assert working is not None
        return rotate_left(working, version)

    return working


# -- Traversal --


def iter_snapshot(root: Node | None, version: int) -> Iterator[CommitRecord]:
    """Yield the records visible at ``version`` in ascending key order."""
    if version < 1:
        return
    stack: list[Node] = []
    node = root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = effective_left(node, version)
        node = stack.pop()
        yield node.record
        node = effective_right(node, version)


def snapshot_at(root: Node | None, version: int) -> list[CommitRecord]:
    """All records visible from ``root`` at ``version``, ordered by key.

    An empty tree, or any version below 1, gives an empty list.
    """
    return list(iter_snapshot(root, version))
