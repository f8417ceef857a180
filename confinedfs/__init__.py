"""confinedfs - key-addressed file storage confined to a local directory."""
from confinedfs.core.exceptions import ConfinedFSError, PathOutOfBoundsError
from confinedfs.storage import LocalStore, PathConfiner, StorageBackend, normalize_path

__all__ = [
    "ConfinedFSError",
    "LocalStore",
    "PathConfiner",
    "PathOutOfBoundsError",
    "StorageBackend",
    "normalize_path",
]
