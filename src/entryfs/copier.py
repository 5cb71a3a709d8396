"""Recursive directory copies with an explicit overwrite policy."""

from __future__ import annotations

import logging

from entryfs.entries import DirectoryEntry, FileSystemEntry
from entryfs.errors import IdenticalPathError, InvalidPathError, TargetAlreadyExistsError

__all__ = ["assert_not_identical", "copy_directory"]

logger = logging.getLogger(__name__)


def assert_not_identical(source: FileSystemEntry, target: FileSystemEntry) -> None:
    """Reject operations whose source and target are the same location.

    Raises:
        IdenticalPathError: If both entries share filesystem and path.
    """
    if source.filesystem is target.filesystem and source.path == target.path:
        raise IdenticalPathError(f"Identical source and target: {source}")


def copy_directory(
    source: DirectoryEntry,
    target: DirectoryEntry,
    replace_existing: bool = False,
) -> bool:
    """Copy a directory tree into a target directory.

    Subdirectories are copied depth-first before the files of each level.
    The overwrite policy applies to the whole call: without
    `replace_existing` an existing target fails before anything is copied,
    with it files already present in the target are replaced one by one.

    Args:
        source: Directory to copy.
        target: Destination directory, possibly on another filesystem.
        replace_existing: Allow copying into an existing target.

    Returns:
        True if the target exists after the copy, False if the backing
        filesystem reported an error (the error is logged).

    Raises:
        IdenticalPathError: If source and target are the same directory.
        InvalidPathError: If target lies inside source.
        TargetAlreadyExistsError: If target exists and replace_existing is False.
        AssertionError: If a copied file is missing afterwards.
    """
    assert_not_identical(source, target)
    if target.filesystem is source.filesystem and target.path.is_in_directory(source.path):
        raise InvalidPathError(f"Cannot copy '{source}' into itself: '{target}'")
    if not replace_existing and target.exists:
        raise TargetAlreadyExistsError(f"Cannot copy to existing directory: {target}")
    try:
        if source.exists:
            target.create()
        for sub_dir in source.enumerate_directories():
            if not copy_directory(sub_dir, target.child_dir(sub_dir.name), replace_existing):
                return False
        for file in source.enumerate_files():
            target.create()
            created = file.copy_to(target.child(file.name), replace_existing)
            if not created.exists:
                raise AssertionError(f"Copied file does not exist: {created}")
    except OSError:
        logger.exception("Failed to copy %s to %s", source, target)
        return False
    logger.debug("Copied %s to %s", source, target)
    return target.exists
