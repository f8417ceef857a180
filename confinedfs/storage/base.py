"""Abstract storage backend interface."""
from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """Abstract base class for storage backends.

    Provides a consistent key-addressed interface so that local and remote
    stores can be swapped for one another.
    """

    @abstractmethod
    def read(self, key: str) -> bytes:
        """Read the content stored under a key.

        Args:
            key: Storage key

        Returns:
            Binary data
        """
        ...

    @abstractmethod
    def write(self, key: str, content: bytes | str) -> int:
        """Write content under a key, replacing any previous content.

        Args:
            key: Storage key
            content: Binary data, or text to be stored as UTF-8

        Returns:
            Number of bytes written
        """
        ...

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check if key exists.

        Args:
            key: Storage key

        Returns:
            True if exists
        """
        ...

    @abstractmethod
    def keys(self, pattern: str = "") -> list[str]:
        """List keys matching a pattern.

        Args:
            pattern: Backend specific key pattern

        Returns:
            List of matching keys
        """
        ...
