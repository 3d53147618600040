"""Gemini custom command management."""

from typing import Annotated

import typer

from agentctl.core.errors import AgentctlError
from agentctl.settings.registry import (
    CUSTOM_COMMAND_TEMPLATES,
    add_custom_command,
    list_custom_commands,
    remove_custom_command,
)
from agentctl.utils.formatting import console, create_table, print_error, print_info, print_success

app = typer.Typer(
    help="Manage Gemini CLI custom commands.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command("list")
def list_commands() -> None:
    """List custom commands."""
    commands = list_custom_commands()
    if not commands:
        print_info("No custom commands configured.")
        return

    table = create_table("Custom commands", "Name", "Prompt")
    for name, config in commands.items():
        table.add_row(name, str(config.get("prompt", "")))
    console.print(table)


@app.command()
def add(
    name: Annotated[str, typer.Argument(help="Command name.")],
    prompt: Annotated[
        str | None,
        typer.Option("--prompt", "-p", help="Prompt text."),
    ] = None,
    template: Annotated[
        str | None,
        typer.Option("--template", "-t", help="Start from a bundled template."),
    ] = None,
    model: Annotated[str | None, typer.Option("--model", "-m", help="Model to use.")] = None,
) -> None:
    """Add or replace a custom command."""
    config: dict[str, object] = {}
    if template:
        if template not in CUSTOM_COMMAND_TEMPLATES:
            print_error(f"Unknown template '{template}'")
            raise typer.Exit(code=1)
        config.update(CUSTOM_COMMAND_TEMPLATES[template])
    if prompt:
        config["prompt"] = prompt
    if model:
        config["model"] = model

    try:
        add_custom_command(name, config)
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Added custom command '{name}'")


@app.command()
def remove(name: Annotated[str, typer.Argument(help="Command name.")]) -> None:
    """Remove a custom command."""
    try:
        remove_custom_command(name)
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Removed custom command '{name}'")


@app.command()
def templates() -> None:
    """List the bundled custom command templates."""
    table = create_table("Templates", "Name", "Prompt")
    for name, config in CUSTOM_COMMAND_TEMPLATES.items():
        table.add_row(name, config["prompt"])
    console.print(table)
