"""Protocol definitions for backing filesystems and environment services.

This module defines abstract interfaces (Protocols) for the collaborators
the entry layer is built on. Designing to interfaces enables:
- Mounting different storage providers behind the same entry handles
- Easy substitution of test doubles (for example a backend whose move is broken)
- Clear contracts for implementations

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from entryfs.upath import UPath

if TYPE_CHECKING:
    from entryfs.entries import DirectoryEntry


@runtime_checkable
class BackingFileSystem(Protocol):
    """Protocol for a storage provider that entries are bound to.

    All paths are absolute `UPath` values. Implementations raise `OSError`
    subclasses (`FileNotFoundError`, `FileExistsError`, ...) or
    `BackingFilesystemError` when an operation fails.
    """

    native_move_is_reliable: bool
    """False when `move_directory` may drop the source without populating the target."""

    def directory_exists(self, path: UPath) -> bool:
        """Check if a directory exists.

        Args:
            path: Path to check.

        Returns:
            True if a directory exists at path, False otherwise.
        """
        ...

    def file_exists(self, path: UPath) -> bool:
        """Check if a file exists.

        Args:
            path: Path to check.

        Returns:
            True if a file exists at path, False otherwise.
        """
        ...

    def file_length(self, path: UPath) -> int:
        """Get the size of a file in bytes.

        Args:
            path: Path to the file.

        Returns:
            File size in bytes.

        Raises:
            FileNotFoundError: If file does not exist.
        """
        ...

    def enumerate_directories(self, path: UPath) -> Iterator[UPath]:
        """Lazily list the child directories of a directory.

        Args:
            path: Directory to enumerate.

        Returns:
            Iterator over child directory paths. Each call starts a new enumeration.

        Raises:
            FileNotFoundError: If the directory does not exist.
        """
        ...

    def enumerate_files(self, path: UPath) -> Iterator[UPath]:
        """Lazily list the child files of a directory.

        Args:
            path: Directory to enumerate.

        Returns:
            Iterator over child file paths. Each call starts a new enumeration.

        Raises:
            FileNotFoundError: If the directory does not exist.
        """
        ...

    def create_directory(self, path: UPath) -> None:
        """Create a directory and any missing parents.

        Args:
            path: Directory to create. Existing directories are left alone.
        """
        ...

    def delete_directory(self, path: UPath, recursive: bool) -> None:
        """Remove a directory.

        Args:
            path: Directory to remove.
            recursive: Also remove the directory contents.

        Raises:
            FileNotFoundError: If the directory does not exist.
            OSError: If the directory is not empty and recursive is False.
        """
        ...

    def delete_file(self, path: UPath) -> None:
        """Remove a file.

        Args:
            path: File to remove.
        """
        ...

    def move_directory(self, src: UPath, dst: UPath) -> None:
        """Move a directory to a new path.

        Args:
            src: Existing directory.
            dst: Destination path, which must not exist yet.

        Raises:
            FileExistsError: If the destination already exists.
        """
        ...

    def move_file(self, src: UPath, dst: UPath) -> None:
        """Move a file to a new path.

        Args:
            src: Existing file.
            dst: Destination path, which must not exist yet.
        """
        ...

    def copy_file(self, src: UPath, dst: UPath, overwrite: bool) -> None:
        """Copy a file.

        Args:
            src: Existing file.
            dst: Destination path.
            overwrite: Replace an existing destination file.

        Raises:
            FileExistsError: If dst exists and overwrite is False.
        """
        ...

    def read_bytes(self, path: UPath) -> bytes:
        """Read the content of a file.

        Args:
            path: Path to the file.

        Returns:
            File content.
        """
        ...

    def write_bytes(self, path: UPath, data: bytes) -> None:
        """Write the content of a file, replacing any previous content.

        Args:
            path: Path to the file. The parent directory must exist.
            data: Content to write.
        """
        ...

    def host_path(self, path: UPath) -> Path:
        """Map a path onto the host filesystem.

        Args:
            path: Path to map.

        Returns:
            The host location of path.

        Raises:
            NotImplementedError: If the backend has no host representation.
        """
        ...


@runtime_checkable
class TempFolderProvider(Protocol):
    """Protocol for resolving well-known scratch and app-data folders."""

    def get_root_temp_folder(self) -> DirectoryEntry:
        """Get the root temporary folder.

        Returns:
            Directory entry for the temp root.
        """
        ...

    def get_root_app_data_folder(self) -> DirectoryEntry:
        """Get the root application data folder.

        Returns:
            Directory entry for the app-data root.
        """
        ...

    def get_or_create_temp_folder(self, name: str) -> DirectoryEntry:
        """Get a named folder below the temp root, creating it if missing.

        Args:
            name: Folder name.

        Returns:
            Existing directory entry.
        """
        ...
