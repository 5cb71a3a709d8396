"""File and directory handles bound to a backing filesystem.

An entry is a (filesystem, path) pair. It owns no data: existence and
metadata are queried from the backing filesystem on demand, and the raw
primitives here delegate to it without any emulation. The safe,
backend-independent operations live in `entryfs.cleanup`,
`entryfs.copier` and `entryfs.mover`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from itertools import chain
from typing import Any

import typer

from entryfs.errors import BackingFilesystemError, InvalidPathError
from entryfs.protocols import BackingFileSystem
from entryfs.upath import UPath

__all__ = [
    "DirectoryEntry",
    "FileEntry",
    "FileSystemEntry",
    "exists",
    "open_externally",
]

logger = logging.getLogger(__name__)


class FileSystemEntry(ABC):
    """Behavior shared by file and directory handles."""

    def __init__(self, filesystem: BackingFileSystem, path: str | UPath) -> None:
        """Bind a handle to a filesystem and an absolute path.

        Args:
            filesystem: Backing filesystem the entry belongs to.
            path: Absolute path of the entry.

        Raises:
            InvalidPathError: If path is not absolute.
        """
        path = UPath(path)
        if not path.is_absolute:
            raise InvalidPathError(f"Entry paths must be absolute: '{path}'")
        self.filesystem = filesystem
        self.path = path

    @property
    def full_name(self) -> str:
        return self.path.full_name

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def parent(self) -> DirectoryEntry | None:
        """Containing directory, or None for the root."""
        parent = self.path.parent
        if parent is None:
            return None
        return DirectoryEntry(self.filesystem, parent)

    @property
    @abstractmethod
    def exists(self) -> bool:
        """Whether the entry currently exists on its filesystem."""
        ...

    @abstractmethod
    def delete_raw(self) -> None:
        """Delete the entry through the backend, without emulation."""
        ...

    def _same_filesystem(self, other: FileSystemEntry) -> None:
        if other.filesystem is not self.filesystem:
            raise BackingFilesystemError(
                f"'{self}' and '{other}' are on different backing filesystems"
            )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        assert isinstance(other, FileSystemEntry)
        return self.filesystem is other.filesystem and self.path == other.path

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.full_name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.filesystem!r}, {self.full_name!r})"


class DirectoryEntry(FileSystemEntry):
    """Handle to a directory."""

    @property
    def exists(self) -> bool:
        return self.filesystem.directory_exists(self.path)

    def child_dir(self, name: str) -> DirectoryEntry:
        """Handle to a subdirectory. Does not touch the filesystem."""
        return DirectoryEntry(self.filesystem, self.path / name)

    def child(self, name: str) -> FileEntry:
        """Handle to a file in this directory. Does not touch the filesystem."""
        return FileEntry(self.filesystem, self.path / name)

    def create(self) -> DirectoryEntry:
        """Create the directory (and its parents) unless it already exists."""
        if not self.exists:
            self.filesystem.create_directory(self.path)
        return self

    def enumerate_directories(self) -> Iterator[DirectoryEntry]:
        for path in self.filesystem.enumerate_directories(self.path):
            yield DirectoryEntry(self.filesystem, path)

    def enumerate_files(self) -> Iterator[FileEntry]:
        for path in self.filesystem.enumerate_files(self.path):
            yield FileEntry(self.filesystem, path)

    def enumerate_entries(self) -> Iterator[FileSystemEntry]:
        return chain(self.enumerate_directories(), self.enumerate_files())

    def delete_raw(self, recursive: bool = False) -> None:
        self.filesystem.delete_directory(self.path, recursive)

    def move_raw(self, target: DirectoryEntry) -> None:
        """Invoke the backend's native move and rebind this handle to the target.

        Args:
            target: Destination on the same backing filesystem.

        Raises:
            BackingFilesystemError: If target is on another filesystem.
        """
        self._same_filesystem(target)
        self.filesystem.move_directory(self.path, target.path)
        self.path = target.path


class FileEntry(FileSystemEntry):
    """Handle to a file."""

    @property
    def exists(self) -> bool:
        return self.filesystem.file_exists(self.path)

    @property
    def directory(self) -> DirectoryEntry:
        """The directory containing this file."""
        parent = self.parent
        assert parent is not None
        return parent

    @property
    def length(self) -> int:
        """File size in bytes."""
        return self.filesystem.file_length(self.path)

    @property
    def name_without_extension(self) -> str:
        return self.path.name_without_extension

    @property
    def extension(self) -> str:
        return self.path.extension

    def delete_raw(self) -> None:
        self.filesystem.delete_file(self.path)

    def copy_to(self, target: FileEntry, overwrite: bool = False) -> FileEntry:
        """Copy this file's content to another file handle.

        Uses the backend's native copy when both files share a filesystem and
        streams the bytes otherwise.

        Args:
            target: Destination file.
            overwrite: Replace an existing destination.

        Returns:
            The target handle.

        Raises:
            FileExistsError: If target exists and overwrite is False.
        """
        if target.filesystem is self.filesystem:
            self.filesystem.copy_file(self.path, target.path, overwrite)
            return target
        if target.exists and not overwrite:
            raise FileExistsError(f"Destination already exists: {target}")
        target.write_bytes(self.read_bytes())
        return target

    def move_raw(self, target: FileEntry) -> None:
        """Invoke the backend's native file move and rebind this handle."""
        self._same_filesystem(target)
        self.filesystem.move_file(self.path, target.path)
        self.path = target.path

    def read_bytes(self) -> bytes:
        return self.filesystem.read_bytes(self.path)

    def write_bytes(self, data: bytes) -> None:
        self.filesystem.write_bytes(self.path, data)

    def read_text(self, encoding: str = "utf-8") -> str:
        return self.read_bytes().decode(encoding)

    def write_text(self, content: str, encoding: str = "utf-8") -> None:
        self.write_bytes(content.encode(encoding))


def exists(entry: FileSystemEntry | None) -> bool:
    """Check existence of a possibly missing handle.

    Args:
        entry: Entry to check, or None.

    Returns:
        False for None, otherwise whether the entry exists.
    """
    if entry is None:
        return False
    return entry.exists


def open_externally(
    entry: FileSystemEntry,
    launcher: Callable[[str], Any] = typer.launch,
) -> bool:
    """Ask the host environment to open an entry in its default application.

    Args:
        entry: File or directory to open. Its backend must map to host paths.
        launcher: Callable receiving the host path.

    Returns:
        True if the request was handed to the host, False on any failure.
    """
    try:
        launcher(str(entry.filesystem.host_path(entry.path)))
        return True
    except Exception:
        logger.exception("Could not open %s in an external application", entry)
    return False
