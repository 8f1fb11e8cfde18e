"""CLI output helpers."""

import sys
from typing import NoReturn

from rich.console import Console
from rich.markup import escape

from .constants import ExitCode

console = Console()
err_console = Console(stderr=True)


def error_exit(message: str, details: list[str] | None = None, code: int = ExitCode.USAGE) -> NoReturn:
    """Print an error to stderr and exit with ``code``."""
    err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)

    if details:
        err_console.print("")
        for detail in details:
            err_console.print(f"  • {escape(detail)}", soft_wrap=True)

    sys.exit(code)


def success(message: str) -> None:
    console.print(f"[green]✓[/green] {escape(message)}", soft_wrap=True)
