"""Rich console output for the CLI."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from localstore.types import KeyInfo


class Display:
    """Console output for localstore (non-interactive)."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize display.

        Args:
            console: Console to print to. Defaults to stdout.
        """
        self.console = console or Console()

    def show_keys(self, keys: list[str], root: str) -> None:
        """Display keys as a flat list.

        Args:
            keys: Sorted keys.
            root: Root directory, shown when there is nothing to list.
        """
        if not keys:
            self.console.print(f"[yellow]No keys under {escape(root)}[/yellow]")
            return

        for key in keys:
            self.console.print(key, highlight=False, markup=False)

    def show_tree(self, keys: list[str], root: str) -> None:
        """Display keys as a tree below the root.

        Args:
            keys: Sorted keys.
            root: Root directory, used as the tree label.
        """
        tree = Tree(f"[bold]{root}[/bold]")
        nodes: dict[str, Tree] = {"": tree}
        for key in keys:
            parent, _, name = key.rpartition("/")
            node = nodes.get(parent, tree)
            nodes[key] = node.add(escape(name))
        self.console.print(tree)

    def show_info(self, info: KeyInfo) -> None:
        """Display file metadata table.

        Args:
            info: Metadata of the file.
        """
        table = Table(title=info.key, show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")

        table.add_row("Size", f"{info.size} bytes")
        table.add_row("Checksum", info.checksum)
        table.add_row("Mime type", info.mime_type)
        table.add_row("Modified", info.modified_at.isoformat())

        self.console.print(table)

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def show_warning(self, message: str) -> None:
        """Show warning message.

        Args:
            message: Warning message.
        """
        self.console.print(f"[yellow]![/yellow] {escape(message)}")
