"""Tests for the bundled backing filesystems."""

from __future__ import annotations

from pathlib import Path

import pytest

from entryfs.errors import BackingFilesystemError, InvalidPathError
from entryfs.filesystem import MemoryFileSystem, PhysicalFileSystem
from entryfs.protocols import BackingFileSystem
from entryfs.upath import UPath


class TestPhysicalFileSystem:
    """Tests for PhysicalFileSystem implementation."""

    def test_satisfies_protocol(self, tmp_path: Path) -> None:
        """Test the implementation matches the BackingFileSystem protocol."""
        assert isinstance(PhysicalFileSystem(tmp_path), BackingFileSystem)

    def test_host_path(self, tmp_path: Path) -> None:
        """Test virtual paths map below the host root."""
        fs = PhysicalFileSystem(tmp_path)

        assert fs.host_path(UPath("/a/b.txt")) == tmp_path / "a" / "b.txt"
        assert fs.host_path(UPath.ROOT) == tmp_path

    def test_relative_path_rejected(self, tmp_path: Path) -> None:
        """Test relative paths are rejected."""
        fs = PhysicalFileSystem(tmp_path)

        with pytest.raises(InvalidPathError):
            fs.host_path(UPath("a"))

    def test_write_read_and_length(self, tmp_path: Path) -> None:
        """Test writing, reading and measuring a file."""
        fs = PhysicalFileSystem(tmp_path)
        path = UPath("/file.txt")

        fs.write_bytes(path, b"Hello, World!")

        assert fs.read_bytes(path) == b"Hello, World!"
        assert fs.file_length(path) == 13
        assert fs.file_exists(path) is True
        assert fs.directory_exists(path) is False

    def test_create_directory_with_parents(self, tmp_path: Path) -> None:
        """Test creating nested directories."""
        fs = PhysicalFileSystem(tmp_path)

        fs.create_directory(UPath("/a/b/c"))
        fs.create_directory(UPath("/a/b/c"))

        assert (tmp_path / "a" / "b" / "c").is_dir()

    def test_enumerate(self, tmp_path: Path) -> None:
        """Test enumerating child directories and files separately."""
        fs = PhysicalFileSystem(tmp_path)
        (tmp_path / "dir1").mkdir()
        (tmp_path / "file1.txt").touch()

        assert list(fs.enumerate_directories(UPath.ROOT)) == [UPath("/dir1")]
        assert list(fs.enumerate_files(UPath.ROOT)) == [UPath("/file1.txt")]

    def test_enumerate_missing_raises(self, tmp_path: Path) -> None:
        """Test enumerating a missing directory raises on iteration."""
        fs = PhysicalFileSystem(tmp_path)

        with pytest.raises(FileNotFoundError):
            list(fs.enumerate_files(UPath("/missing")))

    def test_delete_directory_non_recursive_fails_when_not_empty(self, tmp_path: Path) -> None:
        """Test a non-recursive delete of a non-empty directory raises."""
        fs = PhysicalFileSystem(tmp_path)
        (tmp_path / "tree").mkdir()
        (tmp_path / "tree" / "file.txt").touch()

        with pytest.raises(OSError):
            fs.delete_directory(UPath("/tree"), recursive=False)

        fs.delete_directory(UPath("/tree"), recursive=True)
        assert not (tmp_path / "tree").exists()

    def test_move_directory(self, tmp_path: Path) -> None:
        """Test moving a directory tree."""
        fs = PhysicalFileSystem(tmp_path)
        (tmp_path / "src" / "sub").mkdir(parents=True)
        (tmp_path / "src" / "sub" / "f.txt").write_text("content")

        fs.move_directory(UPath("/src"), UPath("/dst"))

        assert not (tmp_path / "src").exists()
        assert (tmp_path / "dst" / "sub" / "f.txt").read_text() == "content"

    def test_move_directory_to_existing_raises(self, tmp_path: Path) -> None:
        """Test moving onto an existing directory raises FileExistsError."""
        fs = PhysicalFileSystem(tmp_path)
        (tmp_path / "src").mkdir()
        (tmp_path / "dst").mkdir()

        with pytest.raises(FileExistsError):
            fs.move_directory(UPath("/src"), UPath("/dst"))

    def test_copy_file_overwrite(self, tmp_path: Path) -> None:
        """Test copy_file honors the overwrite flag."""
        fs = PhysicalFileSystem(tmp_path)
        (tmp_path / "a.txt").write_text("new")
        (tmp_path / "b.txt").write_text("old")

        with pytest.raises(FileExistsError):
            fs.copy_file(UPath("/a.txt"), UPath("/b.txt"), overwrite=False)
        fs.copy_file(UPath("/a.txt"), UPath("/b.txt"), overwrite=True)

        assert (tmp_path / "b.txt").read_text() == "new"

    def test_root_entry(self, tmp_path: Path) -> None:
        """Test root_entry exposes a host directory as the virtual root."""
        root = PhysicalFileSystem.root_entry(tmp_path)

        assert root.path == UPath.ROOT
        assert root.exists
        assert isinstance(root.filesystem, PhysicalFileSystem)


class TestMemoryFileSystem:
    """Tests for MemoryFileSystem implementation."""

    def test_satisfies_protocol(self) -> None:
        """Test the implementation matches the BackingFileSystem protocol."""
        assert isinstance(MemoryFileSystem(), BackingFileSystem)

    def test_root_exists(self, memory_fs: MemoryFileSystem) -> None:
        """Test the root directory always exists."""
        assert memory_fs.directory_exists(UPath.ROOT)

    def test_capability_flag(self) -> None:
        """Test the move capability flag is configurable."""
        assert MemoryFileSystem().native_move_is_reliable is True
        assert MemoryFileSystem(native_move_is_reliable=False).native_move_is_reliable is False

    def test_write_requires_parent(self, memory_fs: MemoryFileSystem) -> None:
        """Test writing below a missing directory raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            memory_fs.write_bytes(UPath("/missing/a.txt"), b"x")

    def test_read_directory_raises(self, memory_fs: MemoryFileSystem) -> None:
        """Test reading a directory raises IsADirectoryError."""
        memory_fs.create_directory(UPath("/dir"))

        with pytest.raises(IsADirectoryError):
            memory_fs.read_bytes(UPath("/dir"))

    def test_create_directory_over_file_raises(self, memory_fs: MemoryFileSystem) -> None:
        """Test a directory cannot be created where a file exists."""
        memory_fs.write_bytes(UPath("/a"), b"x")

        with pytest.raises(FileExistsError):
            memory_fs.create_directory(UPath("/a/b"))

    def test_enumerate_sorted_by_name(self, memory_fs: MemoryFileSystem) -> None:
        """Test enumeration returns direct children only, sorted by name."""
        memory_fs.create_directory(UPath("/d/z/deep"))
        memory_fs.create_directory(UPath("/d/a"))
        memory_fs.write_bytes(UPath("/d/b.txt"), b"")
        memory_fs.write_bytes(UPath("/d/a.txt"), b"")

        assert list(memory_fs.enumerate_directories(UPath("/d"))) == [UPath("/d/a"), UPath("/d/z")]
        assert list(memory_fs.enumerate_files(UPath("/d"))) == [UPath("/d/a.txt"), UPath("/d/b.txt")]

    def test_enumerate_file_raises(self, memory_fs: MemoryFileSystem) -> None:
        """Test enumerating a file raises NotADirectoryError."""
        memory_fs.write_bytes(UPath("/a.txt"), b"")

        with pytest.raises(NotADirectoryError):
            list(memory_fs.enumerate_files(UPath("/a.txt")))

    def test_delete_directory(self, memory_fs: MemoryFileSystem) -> None:
        """Test recursive and non-recursive deletes."""
        memory_fs.create_directory(UPath("/d/sub"))
        memory_fs.write_bytes(UPath("/d/sub/f"), b"")

        with pytest.raises(BackingFilesystemError):
            memory_fs.delete_directory(UPath("/d"), recursive=False)
        memory_fs.delete_directory(UPath("/d"), recursive=True)

        assert not memory_fs.directory_exists(UPath("/d"))
        assert not memory_fs.directory_exists(UPath("/d/sub"))
        assert not memory_fs.file_exists(UPath("/d/sub/f"))

    def test_delete_root_raises(self, memory_fs: MemoryFileSystem) -> None:
        """Test the root directory cannot be deleted."""
        with pytest.raises(BackingFilesystemError):
            memory_fs.delete_directory(UPath.ROOT, recursive=True)

    def test_move_directory(self, memory_fs: MemoryFileSystem) -> None:
        """Test moving a tree remaps every descendant."""
        memory_fs.create_directory(UPath("/src/sub"))
        memory_fs.write_bytes(UPath("/src/sub/f"), b"data")

        memory_fs.move_directory(UPath("/src"), UPath("/new/dst"))

        assert not memory_fs.directory_exists(UPath("/src"))
        assert memory_fs.directory_exists(UPath("/new/dst/sub"))
        assert memory_fs.read_bytes(UPath("/new/dst/sub/f")) == b"data"

    def test_move_directory_into_itself_raises(self, memory_fs: MemoryFileSystem) -> None:
        """Test a directory cannot be moved below itself."""
        memory_fs.create_directory(UPath("/src"))

        with pytest.raises(BackingFilesystemError):
            memory_fs.move_directory(UPath("/src"), UPath("/src/inner"))

    def test_move_and_copy_file(self, memory_fs: MemoryFileSystem) -> None:
        """Test file moves and copies."""
        memory_fs.write_bytes(UPath("/a"), b"1")

        memory_fs.copy_file(UPath("/a"), UPath("/b"), overwrite=False)
        memory_fs.move_file(UPath("/a"), UPath("/c"))

        assert not memory_fs.file_exists(UPath("/a"))
        assert memory_fs.read_bytes(UPath("/b")) == b"1"
        assert memory_fs.read_bytes(UPath("/c")) == b"1"
        with pytest.raises(FileExistsError):
            memory_fs.copy_file(UPath("/b"), UPath("/c"), overwrite=False)

    def test_host_path_not_supported(self, memory_fs: MemoryFileSystem) -> None:
        """Test the in-memory backend has no host representation."""
        with pytest.raises(NotImplementedError):
            memory_fs.host_path(UPath("/a"))
