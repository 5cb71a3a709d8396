"""Well-known temporary and application data folders.

The environment is an explicit collaborator handed to the move
orchestrator instead of a process-wide singleton, so tests can point the
scratch area at an in-memory filesystem.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from entryfs.entries import DirectoryEntry
from entryfs.filesystem import PhysicalFileSystem
from entryfs.protocols import BackingFileSystem
from entryfs.settings import Settings
from entryfs.upath import UPath

__all__ = ["APP_DATA_DIR", "Environment", "TEMP_DIR"]

# Default host locations
TEMP_DIR = Path(tempfile.gettempdir()) / "entryfs"
APP_DATA_DIR = Path.home() / ".entryfs"


class Environment:
    """Resolves the temp root and the app-data root.

    Satisfies the TempFolderProvider protocol structurally.
    """

    def __init__(self, temp_root: DirectoryEntry, app_data_root: DirectoryEntry) -> None:
        """Initialize the environment.

        Args:
            temp_root: Directory under which scratch folders are created.
            app_data_root: Directory for persistent application data.

        Note:
            Prefer using factory methods `create_default()` or `for_filesystem()`.
        """
        self.temp_root = temp_root
        self.app_data_root = app_data_root

    @classmethod
    def create_default(cls, settings: Settings | None = None) -> Environment:
        """Create an environment backed by host directories.

        Args:
            settings: Optional overrides for the temp and app-data locations.

        Returns:
            Environment rooted in the system temp dir and ~/.entryfs.
        """
        settings = settings or Settings()
        return cls(
            temp_root=PhysicalFileSystem.root_entry(settings.temp_root or TEMP_DIR),
            app_data_root=PhysicalFileSystem.root_entry(settings.app_data_root or APP_DATA_DIR),
        )

    @classmethod
    def for_filesystem(cls, filesystem: BackingFileSystem) -> Environment:
        """Create an environment that keeps its folders inside a backing filesystem.

        Args:
            filesystem: Filesystem holding /.tmp and /.appdata.

        Returns:
            Configured Environment.
        """
        return cls(
            temp_root=DirectoryEntry(filesystem, UPath("/.tmp")),
            app_data_root=DirectoryEntry(filesystem, UPath("/.appdata")),
        )

    def get_root_temp_folder(self) -> DirectoryEntry:
        return self.temp_root.create()

    def get_root_app_data_folder(self) -> DirectoryEntry:
        return self.app_data_root.create()

    def get_or_create_temp_folder(self, name: str) -> DirectoryEntry:
        """Get a folder below the temp root, creating it if missing."""
        return self.get_root_temp_folder().child_dir(name).create()

    def get_or_create_app_data_folder(self, name: str) -> DirectoryEntry:
        """Get a folder below the app-data root, creating it if missing."""
        return self.get_root_app_data_folder().child_dir(name).create()
