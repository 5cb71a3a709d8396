"""Emptiness checks and guaranteed-recursive deletes."""

from __future__ import annotations

import logging

from entryfs.entries import DirectoryEntry, FileSystemEntry, exists
from entryfs.errors import NonEmptyDirectoryError

__all__ = ["delete", "is_empty"]

logger = logging.getLogger(__name__)


def is_empty(directory: DirectoryEntry) -> bool:
    """Check whether a directory has no children.

    A directory that cannot be enumerated (for example because it vanished
    concurrently) counts as empty.

    Args:
        directory: Directory to inspect.

    Returns:
        True if enumeration yields no entries or fails.
    """
    try:
        return next(iter(directory.enumerate_entries()), None) is None
    except OSError as e:
        logger.debug("Enumeration of %s failed, treating it as empty: %s", directory, e)
        return True


def _delete_directory(directory: DirectoryEntry, recursive: bool) -> bool:
    if recursive and not is_empty(directory):
        # Children first, directories depth-first
        for sub_dir in list(directory.enumerate_directories()):
            delete(sub_dir, recursive)
        for file in list(directory.enumerate_files()):
            delete(file, recursive)
    if not is_empty(directory):
        raise NonEmptyDirectoryError(f"Cannot delete non-empty directory: {directory}")
    directory.delete_raw()
    return True


def _delete_existing(entry: FileSystemEntry, recursive: bool) -> bool:
    try:
        if isinstance(entry, DirectoryEntry):
            return _delete_directory(entry, recursive)
        entry.delete_raw()
        return True
    except OSError:
        logger.exception("Failed to delete %s", entry)
    return False


def delete(entry: FileSystemEntry | None, recursive: bool = True) -> bool:
    """Delete a file or directory.

    Directories are emptied first when `recursive` is set: child
    directories depth-first, then child files.

    Args:
        entry: Entry to delete. None and missing entries are a no-op.
        recursive: Delete the children of a directory first.

    Returns:
        True if the entry was deleted, False if it did not exist or the
        backing filesystem reported an error.

    Raises:
        NonEmptyDirectoryError: If a directory still has children right
            before its own delete.
        AssertionError: If the entry still exists after a successful delete.
    """
    if not exists(entry):
        return False
    assert entry is not None
    deleted = _delete_existing(entry, recursive)
    if deleted and entry.exists:
        raise AssertionError(f"Still exists after delete: {entry}")
    return deleted
