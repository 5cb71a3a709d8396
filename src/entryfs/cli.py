"""CLI commands using Typer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from entryfs.context import AppContext

import typer
from rich.logging import RichHandler

from entryfs import __version__
from entryfs.cleanup import delete as delete_entry
from entryfs.console import Output
from entryfs.context import create_context
from entryfs.copier import copy_directory
from entryfs.entries import DirectoryEntry, FileEntry, open_externally
from entryfs.errors import EntryFsError

app = typer.Typer(
    name="entryfs",
    help="Safe copy, move, rename and delete for directory trees",
    no_args_is_help=True,
)

out = Output()


@dataclass
class _Options:
    config_file: Path | None = None


options = _Options()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        out.console.print(f"entryfs v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Configuration file (YAML)")
    ] = None,
) -> None:
    """Safe copy, move, rename and delete for directory trees."""
    options.config_file = config
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=out.console, show_path=False)],
        )


def _get_context(_context: AppContext | None) -> AppContext:
    """Use the injected context or build one from the configuration."""
    if _context is not None:
        return _context
    try:
        return create_context(options.config_file)
    except (ValueError, FileNotFoundError) as e:
        out.show_error(f"Invalid configuration: {e}")
        raise typer.Exit(1) from e


def _report(ok: bool, success: str, failure: str) -> None:
    """Show the outcome of a boolean operation, exiting non-zero on failure."""
    if ok:
        out.show_success(success)
    else:
        out.show_error(failure)
        raise typer.Exit(1)


@app.command()
def copy(
    source: Annotated[Path, typer.Argument(help="Directory to copy")],
    target: Annotated[Path, typer.Argument(help="Destination directory")],
    replace: Annotated[
        bool, typer.Option("--replace", "-r", help="Overwrite an existing destination")
    ] = False,
    _context=None,
) -> None:
    """Copy a directory tree."""
    ctx = _get_context(_context)
    src, dst = ctx.directory(source), ctx.directory(target)
    try:
        ok = copy_directory(src, dst, replace_existing=replace)
    except (EntryFsError, OSError) as e:
        out.show_error(str(e))
        raise typer.Exit(1) from e
    _report(ok, f"Copied {src} to {dst}", f"Failed to copy {src} to {dst}")


@app.command()
def move(
    source: Annotated[Path, typer.Argument(help="Directory to move")],
    target: Annotated[Path, typer.Argument(help="Destination directory")],
    _context=None,
) -> None:
    """Move a directory tree."""
    ctx = _get_context(_context)
    src, dst = ctx.directory(source), ctx.directory(target)
    original = src.full_name
    try:
        ok = ctx.mover.move(src, dst)
    except (EntryFsError, OSError) as e:
        out.show_error(str(e))
        raise typer.Exit(1) from e
    _report(ok, f"Moved {original} to {dst}", f"Failed to move {original} to {dst}")


@app.command()
def rename(
    path: Annotated[Path, typer.Argument(help="File or directory to rename")],
    new_name: Annotated[str, typer.Argument(help="New name")],
    _context=None,
) -> None:
    """Rename a file or directory within its parent."""
    ctx = _get_context(_context)
    entry = ctx.entry(path)
    original = entry.full_name
    try:
        if isinstance(entry, FileEntry):
            ok = ctx.mover.rename_file(entry, new_name)
        else:
            ok = ctx.mover.rename(entry, new_name)
    except (EntryFsError, OSError) as e:
        out.show_error(str(e))
        raise typer.Exit(1) from e
    _report(ok, f"Renamed {original} to {new_name}", f"Failed to rename {original}")


@app.command()
def delete(
    path: Annotated[Path, typer.Argument(help="File or directory to delete")],
    recursive: Annotated[
        bool,
        typer.Option("--recursive/--no-recursive", help="Delete directory contents first"),
    ] = True,
    _context=None,
) -> None:
    """Delete a file or directory."""
    ctx = _get_context(_context)
    entry = ctx.entry(path)
    if not entry.exists:
        out.show_warning(f"Nothing to delete at {entry}")
        return
    try:
        ok = delete_entry(entry, recursive=recursive)
    except EntryFsError as e:
        out.show_error(str(e))
        raise typer.Exit(1) from e
    _report(ok, f"Deleted {entry}", f"Failed to delete {entry}")


@app.command()
def tree(
    path: Annotated[Path, typer.Argument(help="Directory to show")] = Path("."),
    _context=None,
) -> None:
    """Show a directory tree."""
    ctx = _get_context(_context)
    directory: DirectoryEntry = ctx.directory(path)
    out.show_tree(directory)


@app.command("open")
def open_path(
    path: Annotated[Path, typer.Argument(help="File or directory to open")],
    _context=None,
) -> None:
    """Open a file or directory in its default application."""
    ctx = _get_context(_context)
    entry = ctx.entry(path)
    _report(
        open_externally(entry, launcher=ctx.launcher),
        f"Opened {entry}",
        f"Could not open {entry}",
    )
