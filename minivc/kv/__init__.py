"""Artifact storage backends."""

from .base import ArtifactStore
from .folder import Folder
from .memory import Memory

__all__ = ["ArtifactStore", "Folder", "Memory"]
