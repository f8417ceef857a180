"""Pytest configuration and fixtures."""
from pathlib import Path

import pytest

from confinedfs.core.config import Settings
from confinedfs.storage.local import LocalStore


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Test settings with safe defaults."""
    return Settings(
        log_level="DEBUG",
        storage_path=tmp_path / "configured",
        storage_create=True,
    )


@pytest.fixture
def root_dir(tmp_path: Path) -> Path:
    """Existing directory used as a store root."""
    root = tmp_path / "root"
    root.mkdir()
    return root


@pytest.fixture
def store(root_dir: Path) -> LocalStore:
    """Store over an empty root directory."""
    return LocalStore(root_dir)


@pytest.fixture
def populated_store(store: LocalStore) -> LocalStore:
    """Store holding a.txt, a.log and sub/b.txt."""
    root = Path(store.root)
    (root / "a.txt").write_bytes(b"a text")
    (root / "a.log").write_bytes(b"a log")
    (root / "sub").mkdir()
    (root / "sub" / "b.txt").write_bytes(b"b text")
    return store
