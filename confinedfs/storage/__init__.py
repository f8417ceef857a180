"""Storage module - key-addressed file storage abstraction."""
from confinedfs.storage.base import StorageBackend
from confinedfs.storage.local import LocalStore
from confinedfs.storage.paths import PathConfiner, normalize_path

__all__ = ["StorageBackend", "LocalStore", "PathConfiner", "normalize_path"]
