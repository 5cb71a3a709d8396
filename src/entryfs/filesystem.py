"""Bundled backing filesystems.

PhysicalFileSystem maps virtual paths onto a host directory and wraps the
standard library Path and shutil operations. MemoryFileSystem keeps the
whole tree in a dictionary, which makes it the default choice for tests.
Both satisfy the BackingFileSystem protocol structurally.
"""

from __future__ import annotations

import logging
import shutil
import threading
from collections.abc import Iterator
from pathlib import Path

from entryfs.entries import DirectoryEntry
from entryfs.errors import BackingFilesystemError, InvalidPathError
from entryfs.upath import UPath, add_prefix, remove_prefix

__all__ = ["MemoryFileSystem", "PhysicalFileSystem"]

logger = logging.getLogger(__name__)


def _require_absolute(path: UPath) -> UPath:
    if not path.is_absolute:
        raise InvalidPathError(f"Backing filesystem paths must be absolute: '{path}'")
    return path


class PhysicalFileSystem:
    """Backing filesystem rooted at a host directory.

    The virtual root "/" corresponds to `root`. Moves are delegated to
    shutil.move and are considered reliable.
    """

    native_move_is_reliable = True

    def __init__(self, root: Path) -> None:
        """Initialize the filesystem.

        Args:
            root: Host directory that backs the virtual root.
        """
        self.root = root

    @classmethod
    def root_entry(cls, local_dir: Path) -> DirectoryEntry:
        """Create a filesystem for a host directory and return its root entry.

        Args:
            local_dir: Host directory to expose.

        Returns:
            Directory entry for "/" of a new PhysicalFileSystem.
        """
        return DirectoryEntry(cls(local_dir), UPath.ROOT)

    def host_path(self, path: UPath) -> Path:
        """Map a virtual path onto the host."""
        return self.root.joinpath(*_require_absolute(path).segments)

    def directory_exists(self, path: UPath) -> bool:
        return self.host_path(path).is_dir()

    def file_exists(self, path: UPath) -> bool:
        return self.host_path(path).is_file()

    def file_length(self, path: UPath) -> int:
        return self.host_path(path).stat().st_size

    def enumerate_directories(self, path: UPath) -> Iterator[UPath]:
        for child in sorted(self.host_path(path).iterdir()):
            if child.is_dir():
                yield path / child.name

    def enumerate_files(self, path: UPath) -> Iterator[UPath]:
        for child in sorted(self.host_path(path).iterdir()):
            if child.is_file():
                yield path / child.name

    def create_directory(self, path: UPath) -> None:
        self.host_path(path).mkdir(parents=True, exist_ok=True)

    def delete_directory(self, path: UPath, recursive: bool) -> None:
        host = self.host_path(path)
        if recursive:
            shutil.rmtree(host)
        else:
            host.rmdir()

    def delete_file(self, path: UPath) -> None:
        self.host_path(path).unlink()

    def move_directory(self, src: UPath, dst: UPath) -> None:
        src_host = self.host_path(src)
        dst_host = self.host_path(dst)
        if not src_host.is_dir():
            raise FileNotFoundError(f"Directory not found: {src}")
        if dst_host.exists():
            raise FileExistsError(f"Destination already exists: {dst}")
        if dst.is_in_directory(src):
            raise BackingFilesystemError(f"Cannot move '{src}' into itself: '{dst}'")
        dst_host.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(src_host), str(dst_host))

    def move_file(self, src: UPath, dst: UPath) -> None:
        src_host = self.host_path(src)
        dst_host = self.host_path(dst)
        if not src_host.is_file():
            raise FileNotFoundError(f"File not found: {src}")
        if dst_host.exists():
            raise FileExistsError(f"Destination already exists: {dst}")
        shutil.move(str(src_host), str(dst_host))

    def copy_file(self, src: UPath, dst: UPath, overwrite: bool) -> None:
        dst_host = self.host_path(dst)
        if dst_host.exists() and not overwrite:
            raise FileExistsError(f"Destination already exists: {dst}")
        shutil.copy2(self.host_path(src), dst_host)

    def read_bytes(self, path: UPath) -> bytes:
        return self.host_path(path).read_bytes()

    def write_bytes(self, path: UPath, data: bytes) -> None:
        self.host_path(path).write_bytes(data)

    def __repr__(self) -> str:
        return f"PhysicalFileSystem({str(self.root)!r})"


class MemoryFileSystem:
    """In-memory backing filesystem.

    Directories are kept as a set of paths and files as a mapping from path
    to content. The root directory always exists. The internal lock keeps
    the tree consistent for concurrent callers but offers no isolation
    across calls.

    Example::

        fs = MemoryFileSystem()
        fs.create_directory(UPath("/docs"))
        fs.write_bytes(UPath("/docs/a.txt"), b"hello")
    """

    def __init__(self, native_move_is_reliable: bool = True) -> None:
        """Initialize an empty filesystem.

        Args:
            native_move_is_reliable: Capability flag reported to the move
                orchestrator.
        """
        self.native_move_is_reliable = native_move_is_reliable
        self._directories: set[UPath] = {UPath.ROOT}
        self._files: dict[UPath, bytes] = {}
        self._lock = threading.RLock()

    def host_path(self, path: UPath) -> Path:
        raise NotImplementedError("MemoryFileSystem has no host representation")

    def directory_exists(self, path: UPath) -> bool:
        with self._lock:
            return _require_absolute(path) in self._directories

    def file_exists(self, path: UPath) -> bool:
        with self._lock:
            return _require_absolute(path) in self._files

    def file_length(self, path: UPath) -> int:
        return len(self.read_bytes(path))

    def _require_directory(self, path: UPath) -> None:
        if _require_absolute(path) not in self._directories:
            if path in self._files:
                raise NotADirectoryError(f"Not a directory: {path}")
            raise FileNotFoundError(f"Directory not found: {path}")

    def _children(self, path: UPath, pool: set[UPath] | dict[UPath, bytes]) -> list[UPath]:
        with self._lock:
            self._require_directory(path)
            children = [p for p in pool if p.parent == path]
        return sorted(children, key=lambda p: p.name)

    def enumerate_directories(self, path: UPath) -> Iterator[UPath]:
        yield from self._children(path, self._directories)

    def enumerate_files(self, path: UPath) -> Iterator[UPath]:
        yield from self._children(path, self._files)

    def create_directory(self, path: UPath) -> None:
        with self._lock:
            current = UPath.ROOT
            for segment in _require_absolute(path).segments:
                current = current / segment
                if current in self._files:
                    raise FileExistsError(f"A file exists at path: {current}")
                self._directories.add(current)

    def delete_directory(self, path: UPath, recursive: bool) -> None:
        with self._lock:
            self._require_directory(path)
            if path.is_root:
                raise BackingFilesystemError("Cannot delete the root directory")
            nested_dirs = {d for d in self._directories if d != path and d.is_in_directory(path)}
            nested_files = {f for f in self._files if f.is_in_directory(path)}
            if (nested_dirs or nested_files) and not recursive:
                raise BackingFilesystemError(f"Directory not empty: {path}")
            for directory in nested_dirs:
                self._directories.discard(directory)
            for file in nested_files:
                del self._files[file]
            self._directories.discard(path)

    def delete_file(self, path: UPath) -> None:
        with self._lock:
            if _require_absolute(path) not in self._files:
                raise FileNotFoundError(f"File not found: {path}")
            del self._files[path]

    def _check_destination(self, dst: UPath) -> None:
        if dst in self._directories or dst in self._files:
            raise FileExistsError(f"Destination already exists: {dst}")

    def move_directory(self, src: UPath, dst: UPath) -> None:
        with self._lock:
            self._require_directory(src)
            self._check_destination(_require_absolute(dst))
            if dst.is_in_directory(src):
                raise BackingFilesystemError(f"Cannot move '{src}' into itself: '{dst}'")
            if dst.parent is not None:
                self.create_directory(dst.parent)
            moved_dirs = {d for d in self._directories if d.is_in_directory(src)}
            moved_files = {f: data for f, data in self._files.items() if f.is_in_directory(src)}
            self._directories -= moved_dirs
            for file in moved_files:
                del self._files[file]
            self._directories.update(add_prefix(remove_prefix(d, src), dst) for d in moved_dirs)
            for file, data in moved_files.items():
                self._files[add_prefix(remove_prefix(file, src), dst)] = data
        logger.debug("Moved %s to %s (%d files)", src, dst, len(moved_files))

    def move_file(self, src: UPath, dst: UPath) -> None:
        with self._lock:
            data = self.read_bytes(src)
            self._check_destination(_require_absolute(dst))
            self._require_parent(dst)
            del self._files[src]
            self._files[dst] = data

    def copy_file(self, src: UPath, dst: UPath, overwrite: bool) -> None:
        with self._lock:
            data = self.read_bytes(src)
            if _require_absolute(dst) in self._files and not overwrite:
                raise FileExistsError(f"Destination already exists: {dst}")
            self.write_bytes(dst, data)

    def _require_parent(self, path: UPath) -> None:
        if path.parent is None or path.parent not in self._directories:
            raise FileNotFoundError(f"Parent directory does not exist: {path.parent}")

    def read_bytes(self, path: UPath) -> bytes:
        with self._lock:
            if _require_absolute(path) in self._directories:
                raise IsADirectoryError(f"Is a directory: {path}")
            try:
                return self._files[path]
            except KeyError:
                raise FileNotFoundError(f"File not found: {path}") from None

    def write_bytes(self, path: UPath, data: bytes) -> None:
        with self._lock:
            if _require_absolute(path) in self._directories:
                raise IsADirectoryError(f"Is a directory: {path}")
            self._require_parent(path)
            self._files[path] = bytes(data)

    def __repr__(self) -> str:
        return f"MemoryFileSystem(directories={len(self._directories)}, files={len(self._files)})"
