"""Error types raised by entryfs operations."""

from __future__ import annotations

__all__ = [
    "BackingFilesystemError",
    "EntryFsError",
    "IdenticalPathError",
    "InvalidPathError",
    "NonEmptyDirectoryError",
    "TargetAlreadyExistsError",
]


class EntryFsError(Exception):
    """Base class for all entryfs errors."""

    pass


class InvalidPathError(EntryFsError, ValueError):
    """A path or prefix argument is malformed, empty or unset."""

    pass


class IdenticalPathError(EntryFsError, ValueError):
    """Source and target of a move or copy resolve to the same path."""

    pass


class TargetAlreadyExistsError(EntryFsError):
    """A non-overwriting operation targets a path that already exists."""

    pass


class NonEmptyDirectoryError(EntryFsError):
    """A directory still has children when it is about to be deleted."""

    pass


class BackingFilesystemError(EntryFsError, OSError):
    """Lower-level I/O failure reported by a backing filesystem."""

    pass
