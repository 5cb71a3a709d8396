"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from entryfs.entries import DirectoryEntry
from entryfs.environment import Environment
from entryfs.errors import BackingFilesystemError
from entryfs.filesystem import MemoryFileSystem, PhysicalFileSystem
from entryfs.mover import Mover
from entryfs.settings import Settings
from entryfs.upath import UPath


class BrokenMoveFileSystem(MemoryFileSystem):
    """Backend whose native move drops the source without creating the target."""

    def __init__(self) -> None:
        super().__init__(native_move_is_reliable=False)
        self.fail_copies_into: UPath | None = None
        self.native_moves = 0

    def move_directory(self, src: UPath, dst: UPath) -> None:
        self.native_moves += 1
        self.delete_directory(src, recursive=True)

    def copy_file(self, src: UPath, dst: UPath, overwrite: bool) -> None:
        if self.fail_copies_into is not None and dst.is_in_directory(self.fail_copies_into):
            raise BackingFilesystemError(f"Simulated copy failure: {dst}")
        super().copy_file(src, dst, overwrite)


class LeftoverMoveFileSystem(BrokenMoveFileSystem):
    """Broken backend whose native move leaves an empty source directory behind."""

    def move_directory(self, src: UPath, dst: UPath) -> None:
        super().move_directory(src, dst)
        self.create_directory(src)


# ============================================================================
# Filesystem Fixtures
# ============================================================================


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """Create an empty in-memory filesystem with a reliable move."""
    return MemoryFileSystem()


@pytest.fixture
def broken_fs() -> BrokenMoveFileSystem:
    """Create an in-memory filesystem whose native move loses data."""
    return BrokenMoveFileSystem()


@pytest.fixture
def memory_root(memory_fs: MemoryFileSystem) -> DirectoryEntry:
    """Root directory of the in-memory filesystem."""
    return DirectoryEntry(memory_fs, UPath.ROOT)


@pytest.fixture
def physical_root(tmp_path: Path) -> DirectoryEntry:
    """Root directory of a physical filesystem backed by tmp_path."""
    return PhysicalFileSystem.root_entry(tmp_path)


@pytest.fixture
def settings() -> Settings:
    """Default settings."""
    return Settings()


def make_mover(filesystem: MemoryFileSystem, settings: Settings | None = None) -> Mover:
    """Create a mover that keeps its scratch copies inside the given filesystem."""
    return Mover(environment=Environment.for_filesystem(filesystem), settings=settings or Settings())


@pytest.fixture
def mover(memory_fs: MemoryFileSystem) -> Mover:
    """Mover for the reliable in-memory filesystem."""
    return make_mover(memory_fs)


@pytest.fixture
def broken_mover(broken_fs: BrokenMoveFileSystem) -> Mover:
    """Mover for the broken in-memory filesystem."""
    return make_mover(broken_fs)


# ============================================================================
# Sample Tree Fixtures
# ============================================================================


def build_sample_tree(directory: DirectoryEntry) -> DirectoryEntry:
    """Create a.txt = "hello" and sub/b.txt = "world" inside a directory."""
    directory.create()
    directory.child("a.txt").write_text("hello")
    sub = directory.child_dir("sub").create()
    sub.child("b.txt").write_text("world")
    return directory


@pytest.fixture
def sample_tree(memory_root: DirectoryEntry) -> DirectoryEntry:
    """Sample tree at /root on the reliable in-memory filesystem."""
    return build_sample_tree(memory_root.child_dir("root"))


@pytest.fixture
def mock_launcher() -> MagicMock:
    """Create a mock launcher for opening entries externally."""
    return MagicMock(return_value=0)
