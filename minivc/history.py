"""CommitLog: owns the tree roots and the commit counter."""

from __future__ import annotations

import bisect
import logging
import threading
from typing import Iterable, Iterator

from .errors import InvalidVersion
from .tree import CommitRecord, Node, insert, snapshot_at, tree_height

logger = logging.getLogger(__name__)


class CommitLog:
    """The sequence of commits recorded in a versioned commit tree.

    Every insert produces a new root; the log keeps each one keyed by the
    version that produced it, so any past timeline can be rebuilt with
    ``snapshot(version)``. Writers are serialised by a lock. Readers only
    ever see roots that were stored after their insert returned, so they
    never lock.
    """

    def __init__(self) -> None:
        self._versions: list[int] = []
        self._roots: dict[int, Node] = {}
        self._records: dict[int, CommitRecord] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_records(cls, records: Iterable[CommitRecord]) -> "CommitLog":
        """Rebuild a log from previously committed records.

        Records are inserted in ascending ``commit_key`` order. Gaps in
        the numbering are fine; a repeated key raises ``InvalidVersion``.
        """
        log = cls()
        count = 0
        for record in sorted(records, key=lambda r: r.commit_key):
            log.append(record)
            count += 1
        logger.info("Rebuilt commit log with %d commits", count)
        return log

    # -- Read operations --

    @property
    def latest_version(self) -> int:
        """The newest committed version, or 0 for an empty log."""
        return self._versions[-1] if self._versions else 0

    def versions(self) -> list[int]:
        """Committed versions, oldest first."""
        return list(self._versions)

    def __len__(self) -> int:
        return len(self._versions)

    def __contains__(self, version: object) -> bool:
        return version in self._roots

    def root(self, version: int | None = None) -> Node | None:
        """The root retained for the newest version ``<= version``."""
        resolved = self._resolve(version)
        if resolved is None:
            return None
        return self._roots[resolved]

    def get(self, version: int) -> CommitRecord | None:
        """The record committed at exactly ``version``."""
        return self._records.get(version)

    def snapshot(self, version: int | None = None) -> list[CommitRecord]:
        """Commits visible at ``version`` (default: latest), oldest first."""
        resolved = self._resolve(version)
        if resolved is None:
            return []
        return snapshot_at(self._roots[resolved], resolved)

    def history(self, version: int | None = None) -> Iterator[CommitRecord]:
        """Yield the commits visible at ``version``, newest first."""
        yield from reversed(self.snapshot(version))

    def height(self, version: int | None = None) -> int:
        resolved = self._resolve(version)
        if resolved is None:
            return 0
        return tree_height(self._roots[resolved], resolved)

    # -- Write operations --

    def append(self, record: CommitRecord) -> Node:
        """Insert ``record`` at version ``record.commit_key``.

        Returns:
            The root for the new version.

        Raises:
            InvalidVersion: If the version is not positive or does not
                come after the latest committed version.
        """
        with self._lock:
            return self._append(record)

    def commit(
        self,
        file_name: str,
        diff_data: str = "",
        commit_message: str = "",
    ) -> CommitRecord:
        """Record a new commit at the next version and return it."""
        with self._lock:
            record = CommitRecord(
                commit_key=self.latest_version + 1,
                file_name=file_name,
                diff_data=diff_data,
                commit_message=commit_message,
            )
            self._append(record)
        return record

    # -- Internal --

    def _append(self, record: CommitRecord) -> Node:
        """Insert ``record``; the caller holds ``_lock``."""
        version = record.commit_key
        latest = self.latest_version
        if version < 1 or version <= latest:
            raise InvalidVersion(version, latest)
        previous = self._roots[latest] if self._versions else None
        root = insert(previous, version, record)
        self._roots[version] = root
        self._records[version] = record
        self._versions.append(version)
        logger.debug(
            "Committed version %d (%s), tree height %d",
            version,
            record.file_name,
            tree_height(root, version),
        )
        return root

    def _resolve(self, version: int | None) -> int | None:
        """Map a requested version onto the newest committed one at or below it."""
        if not self._versions:
            return None
        if version is None:
            return self._versions[-1]
        if version < 1:
            return None
        idx = bisect.bisect_right(self._versions, version)
        if idx == 0:
            return None
        return self._versions[idx - 1]
