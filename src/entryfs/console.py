"""Rich console output for the command line interface."""

from __future__ import annotations

from rich.console import Console
from rich.tree import Tree

from entryfs.cleanup import is_empty
from entryfs.entries import DirectoryEntry


class Output:
    """Console output for entryfs commands (non-interactive)."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize output.

        Args:
            console: Console to print to. A new one is created if not given.
        """
        self.console = console or Console()

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {message}")

    def show_warning(self, message: str) -> None:
        """Show warning message.

        Args:
            message: Warning message.
        """
        self.console.print(f"[yellow]![/yellow] {message}")

    def show_tree(self, directory: DirectoryEntry) -> None:
        """Display a directory and its descendants as a tree.

        Args:
            directory: Root of the displayed tree.
        """
        if not directory.exists:
            self.console.print(f"[yellow]Directory not found: {directory}[/yellow]")
            return
        tree = Tree(f"[bold blue]{directory.full_name}[/bold blue]")
        self._add_children(tree, directory)
        self.console.print(tree)

    def _add_children(self, tree: Tree, directory: DirectoryEntry) -> None:
        for sub_dir in directory.enumerate_directories():
            branch = tree.add(f"[blue]{sub_dir.name}/[/blue]")
            if not is_empty(sub_dir):
                self._add_children(branch, sub_dir)
        for file in directory.enumerate_files():
            tree.add(f"{file.name} [dim]({file.length} bytes)[/dim]")
