"""Key/path translation confined to a storage root.

Everything here is pure string manipulation: no filesystem access and no
OS path resolution (``realpath``/``Path.resolve``), so the result does not
depend on symlinks or the current working directory.
"""
import re

from confinedfs.core.exceptions import PathOutOfBoundsError

_SEPARATORS = re.compile(r"[\\/]+")


def normalize_path(path: str) -> str:
    """Normalize a path string.

    Backslashes and runs of separators become a single ``/``, ``.`` segments
    are dropped and each ``..`` cancels the closest preceding segment that is
    still standing. A ``..`` with nothing left to cancel is dropped.

    Args:
        path: Path to normalize

    Returns:
        Absolute-looking path starting with ``/`` (``/`` for an empty body)

    Example:
        >>> normalize_path("a//b\\\\c/./d/../e")
        '/a/b/c/e'
    """
    path = _SEPARATORS.sub("/", path).strip("/")

    segments: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments:
                segments.pop()
            continue
        segments.append(segment)

    return "/" + "/".join(segments)


class PathConfiner:
    """Translates between keys and absolute paths under a fixed root.

    Example:
        confiner = PathConfiner("/srv/data")

        confiner.compute_path("reports/../q1.csv")  # "/srv/data/q1.csv"
        confiner.compute_key("/srv/data/q1.csv")    # "q1.csv"
        confiner.compute_path("../etc/passwd")      # PathOutOfBoundsError
    """

    def __init__(self, root: str) -> None:
        self.root = normalize_path(root)
        self._prefix = self.root if self.root.endswith("/") else self.root + "/"

    def __repr__(self) -> str:
        return f"PathConfiner(root={self.root!r})"

    @staticmethod
    def normalize_path(path: str) -> str:
        """Normalize a path string, see :func:`normalize_path`."""
        return normalize_path(path)

    def contains(self, path: str) -> bool:
        """Check whether a normalized path is the root or lies below it.

        Stricter than a bare prefix test: with root ``/srv/data`` the sibling
        ``/srv/data2/x`` is outside.
        """
        return path == self.root or path.startswith(self._prefix)

    def compute_path(self, key: str | None) -> str:
        """Compute the absolute path for a key.

        Args:
            key: Storage key; empty or None means the root itself

        Returns:
            Normalized absolute path

        Raises:
            PathOutOfBoundsError: If the path falls outside the root
        """
        path = normalize_path(f"{self.root}/{key or ''}")

        if not self.contains(path):
            raise PathOutOfBoundsError(
                f"The file '{key}' is out of the filesystem.",
                details={"key": key, "root": self.root},
            )

        return path

    def compute_key(self, path: str) -> str:
        """Compute the key for an absolute path under the root.

        Raises:
            PathOutOfBoundsError: If the path is not under the root
        """
        if not self.contains(path):
            raise PathOutOfBoundsError(
                f"The path '{path}' is out of the filesystem.",
                details={"path": path, "root": self.root},
            )

        return path[len(self.root):].lstrip("/")
