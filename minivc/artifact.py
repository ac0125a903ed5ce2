"""Commit artifacts: the ``commit_<N>.txt`` files a repository holds."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass

from .errors import CorruptArtifact

ARTIFACT_NAME = "commit_%d.txt"
_ARTIFACT_RE = re.compile(r"^commit_([1-9][0-9]*)\.txt$")


def artifact_name(version: int) -> str:
    """Name of the artifact holding commit ``version``."""
    return ARTIFACT_NAME % version


def parse_artifact_name(name: str) -> int | None:
    """Commit number encoded in ``name``, or None if it is not an artifact."""
    match = _ARTIFACT_RE.match(name)
    if match is None:
        return None
    return int(match.group(1))


@dataclass(frozen=True)
class Artifact:
    """The stored form of one commit.

    Encoded as a single JSON header line (file name and message)
    followed by the committed file content.
    """

    file_name: str
    content: str
    message: str = ""

    def encode(self) -> bytes:
        header = json.dumps(
            {"file": self.file_name, "message": self.message},
            ensure_ascii=False,
            sort_keys=True,
        )
        return f"{header}\n{self.content}".encode("utf-8")

    @classmethod
    def decode(cls, raw: bytes, *, name: str | None = None) -> "Artifact":
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CorruptArtifact(name, "not valid UTF-8") from exc

        header_line, sep, content = text.partition("\n")
        try:
            header = json.loads(header_line)
        except json.JSONDecodeError as exc:
            raise CorruptArtifact(name, "missing header") from exc
        if not isinstance(header, dict) or not isinstance(header.get("file"), str):
            raise CorruptArtifact(name, "header has no file name")

        message = header.get("message", "")
        if not isinstance(message, str):
            raise CorruptArtifact(name, "message must be a string")
        return cls(file_name=header["file"], content=content if sep else "", message=message)
