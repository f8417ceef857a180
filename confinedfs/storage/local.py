"""Local filesystem storage backend."""
import os
import re
from collections.abc import Iterator
from contextlib import contextmanager

from confinedfs.core.config import Settings, settings
from confinedfs.core.exceptions import (
    DirectoryCreationError,
    DirectoryExistsError,
    DirectoryNotFoundError,
)
from confinedfs.core.logging import get_logger
from confinedfs.storage.base import StorageBackend
from confinedfs.storage.paths import PathConfiner, normalize_path

logger = get_logger(__name__)


@contextmanager
def _permissive_umask() -> Iterator[None]:
    """Clear the process umask for the duration of the block."""
    previous = os.umask(0)
    try:
        yield
    finally:
        os.umask(previous)


class LocalStore(StorageBackend):
    """Local filesystem storage backend.

    Keys map to files below a root directory. Every key goes through a
    PathConfiner, so a key that would land outside the root is rejected
    before the filesystem is touched.

    Example:
        store = LocalStore("/srv/data", create=True)

        store.write("reports/q1.csv", b"a,b\\n1,2\\n")
        store.read("reports/q1.csv")   # b"a,b\\n1,2\\n"
        store.keys("reports/")         # ["reports/q1.csv"]
        store.read("../etc/passwd")    # PathOutOfBoundsError
    """

    def __init__(
        self,
        directory: str | os.PathLike[str] | None = None,
        create: bool = False,
    ) -> None:
        directory = os.fspath(directory if directory is not None else settings.storage_path)
        if not os.path.isabs(directory):
            directory = os.path.join(os.getcwd(), directory)

        self.confiner = PathConfiner(directory)
        self.ensure_directory_exists(self.root, create)

        logger.info("Local store ready", root=self.root)

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "LocalStore":
        """Create a store from the configured storage path."""
        config = config or settings
        return cls(config.storage_path, create=config.storage_create)

    @property
    def root(self) -> str:
        """Normalized absolute root directory."""
        return self.confiner.root

    def __repr__(self) -> str:
        return f"LocalStore(root={self.root!r})"

    def read(self, key: str) -> bytes:
        """Read the full content of the file stored under key."""
        with open(self.compute_path(key), "rb") as f:
            return f.read()

    def write(self, key: str, content: bytes | str) -> int:
        """Write content to the file for key, creating parent directories."""
        path = self.compute_path(key)
        self.ensure_directory_exists(os.path.dirname(path), create=True)

        if isinstance(content, str):
            content = content.encode("utf-8")

        with open(path, "wb") as f:
            written = f.write(content)

        logger.debug("File written", path=path, size=written)
        return written

    def exists(self, key: str) -> bool:
        """Check if a regular file exists for key."""
        return os.path.isfile(self.compute_path(key))

    def keys(self, pattern: str = "") -> list[str]:
        """List file keys matching a pattern.

        The pattern is split on its last ``/``:

        - ``"log.*"``: whole tree, file paths matching ``<root>/log.*``
        - ``"logs/"``: every file below ``logs``
        - ``"logs/2024-.*"``: files below ``logs`` matching ``<root>/logs/2024-.*``

        The part after the last ``/`` is a regular expression anchored right
        after the scanned directory, so it must match from the start of the
        path relative to that directory.

        Args:
            pattern: Directory and/or regular expression fragment

        Returns:
            Keys of matching files, in traversal order
        """
        pattern = re.sub(r"[\\/]+", "/", pattern)
        if pattern.startswith("/"):
            pattern = pattern[1:]

        directory, sep, fragment = pattern.rpartition("/")

        if not sep:
            return self.list_directory(self.compute_path(None), fragment)
        if not fragment:
            return self.list_directory(self.compute_path(directory), None)
        return self.list_directory(self.compute_path(directory), fragment)

    def list_directory(self, directory: str, pattern: str | None = None) -> list[str]:
        """Recursively list files below a directory.

        Args:
            directory: Absolute path of the directory to scan
            pattern: Optional regular expression matched against
                ``<directory>/<relative file path>``

        Returns:
            Keys of the files found; empty if the directory does not exist
        """
        directory = self.compute_path(self.compute_key(normalize_path(directory)))

        matcher = None
        if pattern:
            matcher = re.compile(f"^{re.escape(directory.rstrip('/'))}/{pattern}")

        keys = []
        for dirpath, _dirnames, filenames in os.walk(directory):
            dirpath = dirpath.replace("\\", "/").rstrip("/")
            for filename in filenames:
                path = f"{dirpath}/{filename}"
                if matcher is not None and not matcher.match(path):
                    continue
                keys.append(self.compute_key(normalize_path(path)))

        return keys

    def compute_path(self, key: str | None) -> str:
        """Compute the absolute path for key, rejecting paths outside the root."""
        return self.confiner.compute_path(key)

    def normalize_path(self, path: str) -> str:
        """Normalize a path string without touching the filesystem."""
        return normalize_path(path)

    def compute_key(self, path: str) -> str:
        """Compute the key for an absolute path under the root."""
        return self.confiner.compute_key(path)

    def ensure_directory_exists(self, directory: str, create: bool = False) -> None:
        """Ensure a directory exists, creating it if allowed.

        Raises:
            DirectoryNotFoundError: If missing and ``create`` is False
            DirectoryCreationError: If it could not be created
        """
        if os.path.isdir(directory):
            return

        if not create:
            raise DirectoryNotFoundError(
                f"The directory '{directory}' does not exist.",
                details={"directory": directory},
            )

        self.create_directory(directory)

    def create_directory(self, directory: str) -> None:
        """Create a directory and its parents with permissive permissions.

        Raises:
            DirectoryExistsError: If the directory already exists
            DirectoryCreationError: If the directory could not be created
        """
        if os.path.isdir(directory):
            raise DirectoryExistsError(
                f"The directory '{directory}' already exists.",
                details={"directory": directory},
            )

        try:
            with _permissive_umask():
                os.makedirs(directory, 0o777)
        except OSError as e:
            logger.error("Failed to create directory", directory=directory, error=str(e))
            raise DirectoryCreationError(
                f"The directory '{directory}' could not be created.",
                details={"directory": directory, "error": str(e)},
            ) from e

        logger.debug("Directory created", directory=directory)
