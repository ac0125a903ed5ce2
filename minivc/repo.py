"""Repo: commit artifacts on a store plus the versioned tree over them."""

from __future__ import annotations

import logging
import threading
from typing import Literal

from .artifact import Artifact, artifact_name, parse_artifact_name
from .config import runtime_config
from .diff import count_changes, summarize
from .history import CommitLog
from .kv.base import ArtifactStore
from .kv.memory import Memory
from .tree import CommitRecord

logger = logging.getLogger(__name__)


class Repo:
    """A repository of committed file versions.

    Each commit is written to the store as ``commit_<N>.txt`` and
    recorded in a ``CommitLog``. The log itself is never persisted:
    opening a repo scans the store and replays every artifact in commit
    order.
    """

    def __init__(self, store: ArtifactStore | None = None) -> None:
        if store is None:
            store = Memory()
        self.store = store
        self._lock = threading.Lock()
        self._log = self._load()

    @property
    def log(self) -> CommitLog:
        return self._log

    @property
    def latest_version(self) -> int:
        return self._log.latest_version

    # -- Read operations --

    def list_files(self) -> list[str]:
        """Artifact names in commit order."""
        return [artifact_name(v) for v in self._log.versions()]

    def read(self, version: int) -> Artifact | None:
        """The artifact committed at ``version``, or None if there is none."""
        if version not in self._log:
            return None
        name = artifact_name(version)
        raw = self.store.get(name)
        if raw is None:
            return None
        return Artifact.decode(raw, name=name)

    def timeline(self, version: int | None = None) -> list[CommitRecord]:
        """Commits visible at ``version`` (default: latest), oldest first."""
        return self._log.snapshot(version)

    def latest_content(self, file_name: str, version: int | None = None) -> str | None:
        """Most recent committed content of ``file_name`` as of ``version``."""
        for record in self._log.history(version):
            if record.file_name == file_name:
                artifact = self.read(record.commit_key)
                if artifact is not None:
                    return artifact.content
        return None

    # -- Write operations --

    def commit(self, file_name: str, content: str, message: str = "") -> CommitRecord:
        """Commit ``content`` as the next version of ``file_name``.

        The artifact is stored before the tree is updated, so a failed
        write leaves no version behind. Concurrent commits on the same
        ``Repo`` are serialised; separate ``Repo`` objects over one store
        are not coordinated.
        """
        with self._lock:
            previous = self.latest_content(file_name) or ""
            diff_data = summarize(previous, content, file_name)

            version = self._log.latest_version + 1
            name = artifact_name(version)
            artifact = Artifact(file_name=file_name, content=content, message=message)
            self.store.set(name, artifact.encode())

            record = CommitRecord(
                commit_key=version,
                file_name=file_name,
                diff_data=diff_data,
                commit_message=message,
            )
            self._log.append(record)
        added, removed = count_changes(diff_data)
        logger.info("Committed %s as %s (+%d -%d)", file_name, name, added, removed)
        return record

    def reload(self) -> None:
        """Discard the in-memory tree and rebuild it from the store."""
        with self._lock:
            self._log = self._load()

    # -- Internal --

    def _load(self) -> CommitLog:
        found: list[tuple[int, str]] = []
        for name in self.store.keys():
            version = parse_artifact_name(name)
            if version is None:
                logger.debug("Skipping non-commit entry %s", name)
                continue
            found.append((version, name))
        found.sort()

        records: list[CommitRecord] = []
        contents: dict[str, str] = {}
        for version, name in found:
            raw = self.store.get(name)
            if raw is None:
                continue
            artifact = Artifact.decode(raw, name=name)
            diff_data = summarize(
                contents.get(artifact.file_name, ""),
                artifact.content,
                artifact.file_name,
            )
            contents[artifact.file_name] = artifact.content
            records.append(
                CommitRecord(
                    commit_key=version,
                    file_name=artifact.file_name,
                    diff_data=diff_data,
                    commit_message=artifact.message,
                )
            )
        return CommitLog.from_records(records)


def open_repo(
    storage: Literal["memory", "folder", "disk"] | None = None,
    *,
    path: str | None = None,
) -> Repo:
    """Open a Repo with defaults from the runtime configuration.

    Args:
        storage: ``"memory"``, ``"folder"`` (plain ``commit_<N>.txt``
            files) or ``"disk"`` (diskcache). Defaults to
            ``MINIVC_STORAGE``.
        path: Repository directory for ``folder``/``disk``. Defaults to
            ``MINIVC_REPO``.

    Returns:
        A ``Repo`` rebuilt from whatever the store already holds.
    """
    config = runtime_config()
    if storage is None:
        if path is not None and not config.storage_explicit:
            storage = "folder"
        else:
            storage = config.storage  # type: ignore[assignment]
    if path is None:
        path = config.repo_path

    if storage == "memory":
        return Repo(Memory())
    if storage == "folder":
        if path is None:
            raise ValueError("path is required when storage='folder'")
        from .kv.folder import Folder

        return Repo(Folder(path))
    if storage == "disk":
        if path is None:
            raise ValueError("path is required when storage='disk'")
        from .kv.disk import Disk

        return Repo(Disk(path))
    raise ValueError(f"Unknown storage: {storage!r}")
