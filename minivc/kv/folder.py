"""Folder-backed artifact store: one plain file per key."""

import os
from pathlib import Path
from typing import Iterable

from .base import ArtifactStore


class Folder(ArtifactStore):
    """Artifact store writing each key as a file in ``directory``.

    Keys must be plain file names. Anything else already in the folder
    (subdirectories, hidden temp files) is ignored when listing.
    """

    def __init__(self, directory: str | os.PathLike) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not key or key in (".", "..") or "/" in key or "\\" in key:
            raise ValueError(f"Invalid artifact name: {key!r}")
        return self.directory / key

    def get(self, key: str) -> bytes | None:
        path = self._path(key)
        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError):
            return None

    def set(self, key: str, value: bytes) -> None:
        if not isinstance(value, bytes):
            raise TypeError(f"Expected bytes, got {type(value).__name__}")
        path = self._path(key)
        tmp = path.with_name(f".{key}.tmp")
        tmp.write_bytes(value)
        os.replace(tmp, path)

    def items(self) -> Iterable[tuple[str, bytes]]:
        for key in self.keys():
            value = self.get(key)
            if value is not None:
                yield key, value

    def keys(self) -> Iterable[str]:
        for entry in sorted(self.directory.iterdir()):
            if entry.is_file() and not entry.name.startswith("."):
                yield entry.name

    def __contains__(self, key: str) -> bool:
        try:
            return self._path(key).is_file()
        except ValueError:
            return False

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass

    def clear(self) -> None:
        for key in list(self.keys()):
            self.remove(key)
