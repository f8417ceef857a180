"""Domain exceptions for confinedfs."""
from typing import Any


class ConfinedFSError(Exception):
    """Base exception for all confinedfs errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


# Path errors
class PathOutOfBoundsError(ConfinedFSError, ValueError):
    """A key or path resolves outside the storage root."""

    pass


# Storage errors
class StorageError(ConfinedFSError):
    """Error in storage operations."""

    pass


class DirectoryNotFoundError(StorageError):
    """Directory does not exist and was not to be created."""

    pass


class DirectoryCreationError(StorageError):
    """Directory could not be created."""

    pass


class DirectoryExistsError(ConfinedFSError):
    """Directory creation was requested for a directory that already exists.

    Raised as a sequencing error rather than a storage failure: callers are
    expected to check existence before asking for creation.
    """

    pass
