"""Settings document commands.

Show, back up and reset the settings files of the managed tools.
"""

import json
from typing import Annotated

import typer
from rich.syntax import Syntax

from agentctl.cli.types import ToolArgument
from agentctl.core.errors import AgentctlError
from agentctl.settings.store import DocumentKind, get_document
from agentctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Inspect, back up and reset tool settings.",
    invoke_without_command=True,
    no_args_is_help=True,
)

KindOption = Annotated[
    DocumentKind | None,
    typer.Option(
        "--kind",
        "-k",
        help="Document to use (defaults to the tool's main settings file).",
        case_sensitive=False,
    ),
]


@app.command()
def show(tool: ToolArgument, kind: KindOption = None) -> None:
    """Print a settings document."""
    try:
        document = get_document(tool, kind)
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    data = document.read()
    if data is None:
        print_info(f"No readable settings at {document.path}")
        return

    console.print(f"[muted]{document.path}[/]")
    console.print(Syntax(json.dumps(data, indent=2, ensure_ascii=False, default=str), "json"))


@app.command()
def path(tool: ToolArgument, kind: KindOption = None) -> None:
    """Print the location of a settings document."""
    try:
        document = get_document(tool, kind)
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    typer.echo(str(document.path))


@app.command()
def backup(tool: ToolArgument, kind: KindOption = None) -> None:
    """Copy a settings document into the backup directory."""
    try:
        backup_path = get_document(tool, kind).backup()
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Backup written to {backup_path}")


@app.command()
def reset(
    tool: ToolArgument,
    kind: KindOption = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Replace a settings document with defaults (after a backup)."""
    try:
        document = get_document(tool, kind)
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not yes:
        if not typer.confirm(f"Reset {document.path} to defaults?"):
            print_info("Cancelled.")
            return

    try:
        backup_path = document.reset()
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if backup_path is not None:
        print_info(f"Previous settings backed up to {backup_path}")
    print_success(f"Reset {document.path}")
