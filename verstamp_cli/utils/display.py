"""Rich output helpers shared by the verstamp commands."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from verstamp_orchestrator.error_catalog import get_error_catalog
from verstamp_orchestrator.exceptions import VerstampError

console = Console()


def show_success_message(message: str) -> None:
    console.print(f"✅ [green]{escape(message)}[/green]")


def show_warning_message(message: str) -> None:
    console.print(f"⚠️  [yellow]{escape(message)}[/yellow]")


def show_error_message(message: str) -> None:
    console.print(f"❌ [red]{escape(message)}[/red]")


def show_verstamp_error(error: VerstampError, verbose: bool = False) -> None:
    """Print a verstamp error; the full diagnostic block only with --verbose."""
    show_error_message(error.message)
    if verbose:
        console.print(Panel(escape(error.format_diagnostic_message()), title=type(error).__name__, border_style="red"))
        return
    for hint in error.resolution_hints:
        console.print(f"💡 [bold]{escape(hint.title)}[/bold]: [dim]{escape(hint.description)}[/dim]")
        for step in hint.steps:
            console.print(f"   • [dim]{escape(step)}[/dim]")


def show_unexpected_error(error: Exception) -> None:
    """Print an error that did not come from verstamp, with catalog hints if any match."""
    show_error_message(f"{type(error).__name__}: {error}")
    for hint in get_error_catalog().find_resolution_hints(str(error)):
        console.print(f"💡 [bold]{escape(hint.title)}[/bold]: [dim]{escape(hint.description)}[/dim]")
        for step in hint.steps:
            console.print(f"   • [dim]{escape(step)}[/dim]")
