"""Status lines printed by the command-line shell around render calls."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

_CONSOLE = Console(highlight=False)


def success(message: str) -> None:
    _CONSOLE.print(f"[bold green]✓[/] [green]{escape(message)}[/]")


def info(message: str) -> None:
    _CONSOLE.print(f"[bold blue]→[/] [bright_blue]{escape(message)}[/]")


def processing(message: str) -> None:
    _CONSOLE.print(f"[bold yellow]⚙[/] [bright_blue]{escape(message)}[/]")
