"""Disk-backed artifact store using diskcache."""

from typing import Iterable, cast

from .base import ArtifactStore

ONE_GB = 1024 * 1024 * 1024


class Disk(ArtifactStore):
    """Artifact store backed by diskcache (SQLite + mmap).

    Eviction is disabled, so no artifact is ever dropped once
    ``size_limit`` is reached.
    """

    def __init__(self, directory: str, size_limit: int = ONE_GB) -> None:
        from diskcache import Cache as DiskCache

        self.store = DiskCache(
            directory, size_limit=size_limit, eviction_policy="none"
        )

    def get(self, key: str) -> bytes | None:
        return cast(bytes | None, self.store.get(key))

    def set(self, key: str, value: bytes) -> None:
        if not isinstance(value, bytes):
            raise TypeError(f"Expected bytes, got {type(value).__name__}")
        self.store[key] = value

    def items(self) -> Iterable[tuple[str, bytes]]:
        for key in self.store.iterkeys():
            yield str(key), cast(bytes, self.store[key])

    def keys(self) -> Iterable[str]:
        for key in self.store.iterkeys():
            yield str(key)

    def __contains__(self, key: str) -> bool:
        return key in self.store

    def remove(self, key: str) -> None:
        try:
            del self.store[key]
        except KeyError:
            pass

    def clear(self) -> None:
        self.store.clear()

    def close(self) -> None:
        self.store.close()
