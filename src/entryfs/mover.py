"""Move and rename operations that behave the same on every backend.

Some backing filesystems implement a native directory move that removes the
source but never materializes the destination. On those backends (and when
emulation is forced through the settings) a move is guarded:

1. The source tree is copied into a fresh scratch folder under the temp root.
2. The native move runs.
3. If the target is missing afterwards, the target is rebuilt from the
   scratch copy and the leftovers of the original directory are removed.

If the native move raises after dropping the source, the target is rebuilt
from the scratch copy the same way. The scratch copy is deleted on every
path except a failed recovery or a move that raised halfway, where it is the
only complete copy of the data.
"""

from __future__ import annotations

import logging
import uuid

from entryfs.cleanup import delete, is_empty
from entryfs.copier import assert_not_identical, copy_directory
from entryfs.entries import DirectoryEntry, FileEntry
from entryfs.environment import Environment
from entryfs.errors import EntryFsError, InvalidPathError, TargetAlreadyExistsError
from entryfs.protocols import BackingFileSystem, TempFolderProvider
from entryfs.settings import Settings
from entryfs.upath import UPath

__all__ = ["Mover"]

logger = logging.getLogger(__name__)


def _sibling_name(new_name: str) -> str:
    """Validate that a new name stays within the current parent directory."""
    name = UPath(new_name)
    if name.is_absolute or len(name.segments) != 1 or name.segments[0] == "..":
        raise InvalidPathError(f"New name must be a single path segment: '{new_name}'")
    return name.name


class Mover:
    """Moves and renames directories and files.

    Follows Separate Use from Creation: constructor requires all dependencies.
    Use factory method `create()` for production instantiation with defaults.
    """

    def __init__(self, environment: TempFolderProvider, settings: Settings) -> None:
        """Initialize the mover with required dependencies.

        Args:
            environment: Resolver for the temp root holding scratch copies.
            settings: Behavior settings (scratch folder name, forced emulation).
        """
        self.environment = environment
        self.settings = settings

    @classmethod
    def create(
        cls,
        environment: TempFolderProvider | None = None,
        settings: Settings | None = None,
    ) -> Mover:
        """Factory method for production instantiation.

        Args:
            environment: Optional environment (host temp folders if not provided).
            settings: Optional settings (defaults if not provided).

        Returns:
            Configured Mover instance.
        """
        settings = settings or Settings()
        return cls(
            environment=environment or Environment.create_default(settings),
            settings=settings,
        )

    def needs_safeguard(self, filesystem: BackingFileSystem) -> bool:
        """Check whether moves on a filesystem must be guarded by a scratch copy."""
        return self.settings.force_move_emulation or not filesystem.native_move_is_reliable

    def _scratch_dir(self, token: str) -> DirectoryEntry:
        temp_copies = self.environment.get_or_create_temp_folder(self.settings.temp_copies_folder)
        return temp_copies.child_dir(token)

    def move(self, source: DirectoryEntry, target: DirectoryEntry) -> bool:
        """Move a directory to a new location.

        On success the source handle is rebound to the target path.

        Args:
            source: Directory to move.
            target: Destination directory, which must not exist.

        Returns:
            True if the target exists afterwards. False if the safeguard copy
            or the recovery failed; the data is then kept in the source or in
            the scratch folder.

        Raises:
            IdenticalPathError: If source and target are the same directory.
            TargetAlreadyExistsError: If the target already exists.
            InvalidPathError: If the target lies inside the source.
            FileNotFoundError: If the source does not exist.
            OSError: If the native move itself fails and the source is left
                intact, or the data could not be restored from the safeguard
                copy (which is then kept).
        """
        assert_not_identical(source, target)
        if not source.exists:
            raise FileNotFoundError(f"Directory not found: {source}")
        if target.exists:
            raise TargetAlreadyExistsError(f"Cannot move to existing directory: {target}")
        if target.filesystem is source.filesystem and target.path.is_in_directory(source.path):
            raise InvalidPathError(f"Cannot move '{source}' into itself: '{target}'")
        original_path = source.path
        token: str | None = None
        if self.needs_safeguard(source.filesystem):
            token = str(uuid.uuid4())
            if not copy_directory(source, self._scratch_dir(token)):
                logger.error("Safeguard copy of %s failed, not moving it", source)
                self._discard_scratch(token)
                return False
        try:
            source.move_raw(target)
        except OSError:
            if token is None:
                raise
            original = DirectoryEntry(source.filesystem, original_path)
            if original.exists and not target.exists:
                self._discard_scratch(token)
                raise
            if not original.exists and self._emulate_move(original_path, token, target):
                logger.warning(
                    "Native move dropped %s, restored %s from its safeguard copy",
                    original_path,
                    target,
                )
                source.path = target.path
                return True
            logger.error(
                "Native move of %s to %s failed halfway, safeguard copy kept at %s",
                original_path,
                target,
                self._scratch_dir(token),
            )
            raise
        if token is not None:
            if not target.exists:
                return self._emulate_move(original_path, token, target)
            logger.warning("Safeguard copy for moving %s to %s was not needed", original_path, target)
            self._discard_scratch(token)
        return target.exists

    def _emulate_move(self, original_path: UPath, token: str, target: DirectoryEntry) -> bool:
        """Rebuild the target of a failed native move from its scratch copy."""
        scratch = self._scratch_dir(token)
        logger.debug("Native move did not create %s, restoring it from %s", target, scratch)
        if is_empty(scratch):
            target.create()
        elif not copy_directory(scratch, target, replace_existing=True):
            logger.error("Could not move scratch copy %s into target %s", scratch, target)
            return False
        self._cleanup_after_emulated_move(original_path, scratch, target.filesystem)
        return target.exists

    def _cleanup_after_emulated_move(
        self,
        original_path: UPath,
        scratch: DirectoryEntry,
        filesystem: BackingFileSystem,
    ) -> None:
        self._discard(scratch)
        original = DirectoryEntry(filesystem, original_path)
        try:
            if original.exists:
                delete(original)
        except (OSError, EntryFsError):
            logger.exception("Cleanup of original directory %s failed", original)

    def _discard_scratch(self, token: str) -> None:
        self._discard(self._scratch_dir(token))

    def _discard(self, scratch: DirectoryEntry) -> None:
        try:
            delete(scratch)
        except (OSError, EntryFsError):
            logger.exception("Could not delete scratch copy %s", scratch)

    def rename(self, directory: DirectoryEntry, new_name: str) -> bool:
        """Rename a directory within its parent.

        Args:
            directory: Directory to rename.
            new_name: New name of the directory.

        Returns:
            True if the renamed directory exists afterwards.

        Raises:
            InvalidPathError: If directory is the root or new_name is not a
                single path segment.
            TargetAlreadyExistsError: If a sibling named new_name exists.
        """
        parent = directory.parent
        if parent is None:
            raise InvalidPathError("Cannot rename the root directory")
        new_name = _sibling_name(new_name)
        target = parent.child_dir(new_name)
        if target.exists or parent.child(new_name).exists:
            raise TargetAlreadyExistsError(f"Already exists: {target}")
        return self.move(directory, target)

    def move_file(self, file: FileEntry, target_dir: DirectoryEntry) -> bool:
        """Move a file into another directory, keeping its name.

        Args:
            file: File to move. The handle is rebound to the new location.
            target_dir: Destination directory, created if missing.

        Returns:
            True if the file exists at its new location.

        Raises:
            TargetAlreadyExistsError: If the directory already has an entry
                with the file's name.
        """
        target = target_dir.child(file.name)
        assert_not_identical(file, target)
        if target.exists or target_dir.child_dir(file.name).exists:
            raise TargetAlreadyExistsError(f"Already exists: {target}")
        target_dir.create()
        return self._move_file_to(file, target)

    def rename_file(self, file: FileEntry, new_name: str) -> bool:
        """Rename a file within its directory.

        Raises:
            InvalidPathError: If new_name is not a single path segment.
            TargetAlreadyExistsError: If a sibling named new_name exists.
        """
        directory = file.directory
        new_name = _sibling_name(new_name)
        target = directory.child(new_name)
        assert_not_identical(file, target)
        if target.exists or directory.child_dir(new_name).exists:
            raise TargetAlreadyExistsError(f"Already exists: {target}")
        return self._move_file_to(file, target)

    def _move_file_to(self, file: FileEntry, target: FileEntry) -> bool:
        if not self.needs_safeguard(file.filesystem):
            file.move_raw(target)
            return target.exists
        # Copy, verify, then delete the source
        copied = file.copy_to(target)
        if not copied.exists:
            logger.error("Could not copy %s to %s, keeping the source", file, target)
            return False
        if not delete(file):
            logger.error("Copied %s to %s but could not delete the source", file, target)
            return False
        file.path = target.path
        return target.exists
