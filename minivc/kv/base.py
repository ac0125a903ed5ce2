"""Abstract artifact store interface."""

from abc import ABC, abstractmethod
from typing import Iterable


class ArtifactStore(ABC):
    """Store of commit artifacts keyed by name, operating on bytes only.

    Encoding of artifact contents is handled at higher layers
    (see ``minivc.artifact``).
    """

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Get bytes value for key, or None if not found."""

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Set bytes value for key."""

    @abstractmethod
    def items(self) -> Iterable[tuple[str, bytes]]:
        """Iterate over all key-value pairs."""

    @abstractmethod
    def keys(self) -> Iterable[str]:
        """Iterate over all keys."""

    @abstractmethod
    def __contains__(self, key: str) -> bool:
        """Check if key exists in store."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove a key if present."""

    @abstractmethod
    def clear(self) -> None:
        """Remove all items from the store."""
