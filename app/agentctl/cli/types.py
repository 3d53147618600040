"""Shared types and utilities for CLI commands."""

from typing import Annotated

import typer

from agentctl.models.tool import TargetTool

ToolArgument = Annotated[
    TargetTool,
    typer.Argument(
        help="Tool to operate on (claude-code, codex, gemini).",
        case_sensitive=False,
    ),
]

ToolOption = Annotated[
    TargetTool,
    typer.Option(
        "--tool",
        "-t",
        help="Tool to operate on.",
        case_sensitive=False,
    ),
]


def parse_key_values(pairs: list[str] | None) -> dict[str, str]:
    """Parse ``KEY=VALUE`` strings from repeated options.

    Raises:
        typer.BadParameter: If an item has no ``=``.
    """
    result: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got '{pair}'")
        result[key] = value
    return result
