"""Tests for path normalization and root confinement."""
import pytest

from confinedfs.core.exceptions import ConfinedFSError, PathOutOfBoundsError
from confinedfs.storage.paths import PathConfiner, normalize_path

ROOT = "/srv/data"


class TestNormalizePath:
    """Test cases for normalize_path."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("a//b\\c/./d/../e", "/a/b/c/e"),
            ("/", "/"),
            ("", "/"),
            ("a/b/", "/a/b"),
            ("///a///b///", "/a/b"),
            ("\\\\a\\b", "/a/b"),
            ("./a/.", "/a"),
            ("a/b/../../c", "/c"),
            ("a/./../b", "/b"),
            ("..", "/"),
            ("../../a", "/a"),
            ("a/../..", "/"),
            ("/srv/data/../etc", "/srv/etc"),
            ("a/.../b", "/a/.../b"),
            ("a/..b/c", "/a/..b/c"),
        ],
    )
    def test_examples(self, path: str, expected: str) -> None:
        """Test normalization of representative inputs."""
        assert normalize_path(path) == expected

    @pytest.mark.parametrize(
        "path",
        ["", "/", "a//b\\c/./d/../e", "../x/../../y", "a/b/c/../../../..", "\\.\\..\\z", "a/..."],
    )
    def test_idempotent(self, path: str) -> None:
        """Test that normalizing twice changes nothing."""
        once = normalize_path(path)
        assert normalize_path(once) == once

    def test_never_trailing_slash(self) -> None:
        """Test that only the root-only result ends with a slash."""
        assert not normalize_path("a/b/c//").endswith("/")
        assert normalize_path("a/..") == "/"


class TestPathConfiner:
    """Test cases for PathConfiner."""

    def test_root_is_normalized(self) -> None:
        """Test that the root itself is normalized on construction."""
        confiner = PathConfiner("/srv//data/./x/../")
        assert confiner.root == ROOT

    def test_compute_path(self) -> None:
        """Test path computation for plain keys."""
        confiner = PathConfiner(ROOT)
        assert confiner.compute_path("dir/file.txt") == "/srv/data/dir/file.txt"
        assert confiner.compute_path("dir\\sub//file.txt") == "/srv/data/dir/sub/file.txt"

    @pytest.mark.parametrize("key", [None, "", "/", ".", "a/.."])
    def test_compute_path_root(self, key: str | None) -> None:
        """Test that empty keys address the root itself."""
        assert PathConfiner(ROOT).compute_path(key) == ROOT

    def test_compute_path_resolves_internal_dots(self) -> None:
        """Test that dot segments staying inside the root are allowed."""
        confiner = PathConfiner(ROOT)
        assert confiner.compute_path("a/../b/./c") == "/srv/data/b/c"

    @pytest.mark.parametrize(
        "key",
        ["../../etc/passwd", "a/../../b", "..", "../data2/file", "/../../x"],
    )
    def test_compute_path_rejects_escape(self, key: str) -> None:
        """Test that keys walking above the root are rejected."""
        with pytest.raises(PathOutOfBoundsError) as exc_info:
            PathConfiner(ROOT).compute_path(key)

        assert key in exc_info.value.message
        assert exc_info.value.details["key"] == key

    def test_sibling_with_common_prefix_is_outside(self) -> None:
        """Test that /srv/data2 is not considered inside /srv/data."""
        confiner = PathConfiner(ROOT)
        assert confiner.contains("/srv/data")
        assert confiner.contains("/srv/data/x")
        assert not confiner.contains("/srv/data2/x")

        with pytest.raises(PathOutOfBoundsError):
            confiner.compute_key("/srv/data2/x")

    def test_compute_key(self) -> None:
        """Test key computation for paths under the root."""
        confiner = PathConfiner(ROOT)
        assert confiner.compute_key("/srv/data/dir/file.txt") == "dir/file.txt"
        assert confiner.compute_key(ROOT) == ""

    def test_compute_key_rejects_outside_path(self) -> None:
        """Test that paths outside the root are rejected with the path named."""
        with pytest.raises(PathOutOfBoundsError) as exc_info:
            PathConfiner(ROOT).compute_key("/etc/passwd")

        assert "/etc/passwd" in str(exc_info.value)

    def test_out_of_bounds_error_kinds(self) -> None:
        """Test that the error is catchable as domain and value errors."""
        with pytest.raises(ConfinedFSError):
            PathConfiner(ROOT).compute_path("../x")
        with pytest.raises(ValueError):
            PathConfiner(ROOT).compute_path("../x")

    @pytest.mark.parametrize(
        "key",
        ["file.txt", "a/b/c.txt", "a//b\\c/./d/../e", "./x", "x/y/../z/", ""],
    )
    def test_round_trip(self, key: str) -> None:
        """Test that compute_key inverts compute_path up to normalization."""
        confiner = PathConfiner(ROOT)
        expected = normalize_path(key).lstrip("/")

        assert confiner.compute_key(confiner.compute_path(key)) == expected

    def test_filesystem_root(self) -> None:
        """Test confinement when the root is the filesystem root."""
        confiner = PathConfiner("/")
        assert confiner.compute_path("etc/hosts") == "/etc/hosts"
        assert confiner.compute_path("../../etc") == "/etc"
        assert confiner.compute_key("/etc/hosts") == "etc/hosts"
