"""Test configuration and fixtures for fs-utils."""

import os
import stat
import sys

import pytest

from fs_utils.core.exceptions import StorageIOError
from fs_utils.storage import LocalStorage


@pytest.fixture
def temp_dir(tmp_path):
    """Create a temporary directory for testing."""
    return tmp_path


@pytest.fixture
def sample_tree(temp_dir):
    """Create two files and one empty subdirectory."""
    root = temp_dir / "t"
    root.mkdir()
    (root / "a.txt").write_text("alpha\n")
    (root / "b.txt").write_text("beta\n")
    (root / "sub").mkdir()
    return root


@pytest.fixture
def nested_tree(temp_dir):
    """Create a tree with files at two levels."""
    root = temp_dir / "nested"
    root.mkdir()
    (root / "top.txt").write_text("top\n")
    inner = root / "inner"
    inner.mkdir()
    (inner / "deep.txt").write_text("deep\n")
    return root


class FailingListStorage(LocalStorage):
    """Local storage whose listing fails for one directory."""

    def __init__(self, failing_path: str):
        self.failing_path = failing_path
        self.listed: list[str] = []

    def list_directory(self, path: str) -> list[str]:
        if path == self.failing_path:
            raise StorageIOError(f"Failed to list '{path}': permission denied", path)
        self.listed.append(path)
        return super().list_directory(path)


class ChainStorage(LocalStorage):
    """Storage presenting a single chain of nested directories under ``/chain``."""

    def __init__(self, depth: int):
        self.depth = depth

    def _level(self, path: str) -> int:
        return path.count("/d") if path.startswith("/chain") else -1

    def stat(self, path: str, follow_symlinks: bool = True) -> os.stat_result:
        if not 0 <= self._level(path) <= self.depth:
            return super().stat(path, follow_symlinks)
        return os.stat_result((stat.S_IFDIR | 0o755,) + (0,) * 9)

    def list_directory(self, path: str) -> list[str]:
        return ["d"] if self._level(path) < self.depth else []


@pytest.fixture
def failing_storage(sample_tree):
    """Storage that cannot list the sample tree's subdirectory."""
    return FailingListStorage(str(sample_tree / "sub"))


@pytest.fixture
def chain_storage():
    """Storage whose single directory chain is deeper than the recursion limit."""
    return ChainStorage(sys.getrecursionlimit() + 200)
