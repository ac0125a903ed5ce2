"""minivc: a partially persistent commit tree for file versioning."""

from .artifact import Artifact, artifact_name, parse_artifact_name
from .config import runtime_config
from .errors import CorruptArtifact, InvalidVersion
from .history import CommitLog
from .kv.base import ArtifactStore
from .repo import Repo, open_repo
from .tree import (
    MAX_MODS,
    CommitRecord,
    Field,
    Modification,
    Node,
    insert,
    snapshot_at,
)

runtime_config()

__all__ = [
    "MAX_MODS",
    "Artifact",
    "ArtifactStore",
    "CommitLog",
    "CommitRecord",
    "CorruptArtifact",
    "Field",
    "InvalidVersion",
    "Modification",
    "Node",
    "Repo",
    "artifact_name",
    "insert",
    "open_repo",
    "parse_artifact_name",
    "snapshot_at",
]
