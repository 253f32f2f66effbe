"""Rich helpers for diagnostics on standard error."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

# stdout carries the prompt itself, so everything here goes to stderr
console = Console(stderr=True, highlight=False)


def warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]⚠[/yellow] {escape(message)}")


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {escape(message)}", style="red")
