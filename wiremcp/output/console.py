"""
WireMCP Console Output Module

Rich console formatting for the offline CLI commands.
"""

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.box import ROUNDED

from wiremcp import __version__


class WireMCPConsole:
    """Rich console interface for the WireMCP CLI."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def print_header(self, command: str, target: str) -> None:
        """Print the command header line."""
        header = Text()
        header.append("WireMCP", style="cyan bold")
        header.append(f" v{__version__}", style="dim")
        header.append(" | ", style="dim")
        header.append(command, style="bright_white bold")
        header.append(f" {target}", style="bright_blue")
        self.console.print(header)
        self.console.print()

    def print_result(self, title: str, text: str, is_error: bool = False) -> None:
        """Print tool output inside a panel."""
        self.console.print(
            Panel(
                Text(text),
                title=f"[bold]{title}[/bold]",
                border_style="red" if is_error else "green",
                box=ROUNDED,
            )
        )

    def print_success(self, text: str) -> None:
        """Print a success message."""
        self.console.print(f"  [green]✓[/green] {text}")

    def print_error(self, text: str) -> None:
        """Print an error message."""
        self.console.print(f"  [red]✗[/red] {text}")


# Singleton console instance
_console: WireMCPConsole | None = None


def get_console() -> WireMCPConsole:
    """Get the singleton console instance."""
    global _console
    if _console is None:
        _console = WireMCPConsole()
    return _console
