"""Application context for dependency injection.

This module separates object creation from object use, enabling testability
and reducing coupling in CLI commands.

Dependencies are typed using Protocols where one exists, so test doubles
(an in-memory environment, a mock launcher) can be injected without
inheritance.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import typer

from entryfs.entries import DirectoryEntry, FileEntry, FileSystemEntry
from entryfs.environment import Environment
from entryfs.filesystem import PhysicalFileSystem
from entryfs.mover import Mover
from entryfs.protocols import BackingFileSystem, TempFolderProvider
from entryfs.settings import Settings, load_settings
from entryfs.upath import UPath


def _default_filesystem() -> BackingFileSystem:
    """Create the default filesystem implementation."""
    return PhysicalFileSystem(Path("/"))


@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for all services used by CLI commands.
    """

    settings: Settings
    environment: TempFolderProvider
    mover: Mover
    filesystem: BackingFileSystem = field(default_factory=_default_filesystem)
    launcher: Callable[[str], Any] = typer.launch

    def directory(self, path: Path | str) -> DirectoryEntry:
        """Directory handle for a host path on the context's filesystem."""
        return DirectoryEntry(self.filesystem, _to_upath(path))

    def file(self, path: Path | str) -> FileEntry:
        """File handle for a host path on the context's filesystem."""
        return FileEntry(self.filesystem, _to_upath(path))

    def entry(self, path: Path | str) -> FileSystemEntry:
        """File handle if a file exists at path, directory handle otherwise."""
        file = self.file(path)
        return file if file.exists else self.directory(path)


def _to_upath(path: Path | str) -> UPath:
    if isinstance(path, Path):
        path = path.expanduser().absolute().as_posix()
    return UPath(path).to_absolute()


def create_context(config_file: Path | None = None) -> AppContext:
    """Factory for application dependencies.

    Creates all services with proper wiring. Use this in production code.
    For tests, construct AppContext directly with test doubles.

    Args:
        config_file: Override the configuration file location.

    Returns:
        Configured AppContext with all dependencies.
    """
    settings = load_settings(config_file)
    environment = Environment.create_default(settings)
    mover = Mover.create(environment=environment, settings=settings)

    return AppContext(
        settings=settings,
        environment=environment,
        mover=mover,
        filesystem=_default_filesystem(),
    )
