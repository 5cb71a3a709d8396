"""Backend-independent file and directory operations for virtual filesystems."""

__version__ = "0.1.0"

# Export the public API for type hints and dependency injection
from entryfs.cleanup import delete, is_empty
from entryfs.copier import copy_directory
from entryfs.entries import DirectoryEntry, FileEntry, FileSystemEntry, exists, open_externally
from entryfs.environment import Environment
from entryfs.errors import (
    BackingFilesystemError,
    EntryFsError,
    IdenticalPathError,
    InvalidPathError,
    NonEmptyDirectoryError,
    TargetAlreadyExistsError,
)
from entryfs.filesystem import MemoryFileSystem, PhysicalFileSystem
from entryfs.mover import Mover
from entryfs.protocols import BackingFileSystem, TempFolderProvider
from entryfs.settings import Settings
from entryfs.upath import UPath, add_prefix, first_segment, remove_prefix

__all__ = [
    "__version__",
    "BackingFileSystem",
    "BackingFilesystemError",
    "DirectoryEntry",
    "EntryFsError",
    "Environment",
    "FileEntry",
    "FileSystemEntry",
    "IdenticalPathError",
    "InvalidPathError",
    "MemoryFileSystem",
    "Mover",
    "NonEmptyDirectoryError",
    "PhysicalFileSystem",
    "Settings",
    "TargetAlreadyExistsError",
    "TempFolderProvider",
    "UPath",
    "add_prefix",
    "copy_directory",
    "delete",
    "exists",
    "first_segment",
    "is_empty",
    "open_externally",
    "remove_prefix",
]
