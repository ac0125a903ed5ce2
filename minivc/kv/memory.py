"""In-memory artifact store."""

import threading
from typing import Iterable

from .base import ArtifactStore


class Memory(ArtifactStore):
    """A memory-backed artifact store."""

    def __init__(self) -> None:
        self.memory: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        return self.memory.get(key)

    def set(self, key: str, value: bytes) -> None:
        if not isinstance(value, bytes):
            raise TypeError(f"Expected bytes, got {type(value).__name__}")
        with self._lock:
            self.memory[key] = value

    def items(self) -> Iterable[tuple[str, bytes]]:
        return list(self.memory.items())

    def keys(self) -> Iterable[str]:
        return list(self.memory.keys())

    def __contains__(self, key: str) -> bool:
        return key in self.memory

    def remove(self, key: str) -> None:
        with self._lock:
            self.memory.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self.memory.clear()
