"""Shared Rich consoles and message helpers.

Regular output goes to stdout; warnings and errors go to stderr so they
stay visible when stdout is piped (e.g. ``agentctl settings path``).
"""

from __future__ import annotations

import sys

from rich.console import Console
from rich.table import Table

from agentctl.core.theme import get_theme


def _make_console(stderr: bool = False) -> Console:
    stream = sys.stderr if stderr else sys.stdout
    # Hex palette colors need truecolor; otherwise let Rich decide
    color_system = "truecolor" if stream.isatty() else None
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = _make_console()
err_console = _make_console(stderr=True)


def create_table(title: str, *columns: str) -> Table:
    """Create a themed table.

    Args:
        title: Table title.
        *columns: Column headers, in display order.

    Returns:
        Table with the given columns and no rows.
    """
    table = Table(title=title, header_style="header", border_style="border")
    for column in columns:
        table.add_column(column)
    return table


def print_info(message: str) -> None:
    console.print(message, style="info")


def print_hint(message: str) -> None:
    console.print(message, style="muted")


def print_success(message: str) -> None:
    console.print(f"[success]✔[/] {message}")


def print_warning(message: str) -> None:
    err_console.print(f"[warning]![/] {message}")


def print_error(message: str) -> None:
    err_console.print(f"[error]✖ Error:[/] {message}")
