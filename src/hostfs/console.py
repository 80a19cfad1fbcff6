"""Rich output for the hostfs CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from hostfs.config import FileSystemSettings
    from hostfs.types import PathInfo


class Output:
    """Text output for hostfs commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize output.

        Args:
            console: Console to print to. Defaults to a new stdout Console.
        """
        self.console = console or Console()

    def show_path_info(self, info: PathInfo) -> None:
        """Display a table describing a path.

        Args:
            info: Collected path information.
        """
        if info.is_directory:
            kind = "directory"
        elif info.is_file:
            kind = "file"
        elif info.exists:
            kind = "other"
        else:
            kind = "[yellow]missing[/yellow]"

        table = Table(title=escape(info.path), show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")

        table.add_row("Type", kind)
        table.add_row("Name", escape(info.name))
        table.add_row("Basename", escape(info.basename))
        table.add_row("Dirname", escape(info.dirname))
        table.add_row("Extension", escape(info.extension) or "[dim]none[/dim]")
        table.add_row("Size", f"{info.size} bytes" if info.size is not None else "-")
        table.add_row("MIME type", info.mime_type or "-")

        self.console.print(table)

    def show_settings(self, settings: FileSystemSettings, source: str) -> None:
        """Display effective settings.

        Args:
            settings: Loaded settings.
            source: Where the settings came from.
        """
        self.console.print("\n[bold]Configuration[/bold]")
        self.console.print(f"  Source: {escape(source)}")
        self.console.print(f"  Encoding: {settings.encoding}")
        self.console.print(f"  Max path length: {settings.max_path_length}")
        self.console.print(f"  Default mode: {settings.default_mode:o}")
        self.console.print(f"  Lock writes: {settings.lock_writes}")
        self.console.print(f"  Strict rmdir: {settings.strict_rmdir}")

    def show_content(self, content: str) -> None:
        """Print file content verbatim."""
        self.console.out(content, highlight=False, end="")

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
        self.console.print(f"[yellow]![/yellow] {escape(message)}")

    def show_info(self, message: str) -> None:
        self.console.print(f"[blue]i[/blue] {escape(message)}")
