"""MCP server commands.

Add, remove and list the MCP servers configured for each tool.
"""

from typing import Annotated

import typer

from agentctl.cli.types import ToolArgument, parse_key_values
from agentctl.core.errors import AgentctlError
from agentctl.settings.registry import (
    MCP_SERVER_PRESETS,
    add_mcp_server,
    install_mcp_presets,
    list_mcp_servers,
    remove_mcp_server,
)
from agentctl.utils.formatting import console, create_table, print_error, print_info, print_success

app = typer.Typer(
    help="Manage MCP servers.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command("list")
def list_servers(tool: ToolArgument) -> None:
    """List configured MCP servers."""
    servers = list_mcp_servers(tool)
    if not servers:
        print_info(f"No MCP servers configured for {tool.value}.")
        return

    table = create_table(f"{tool.value} MCP servers", "Name", "Command", "Arguments")
    for name, config in servers.items():
        table.add_row(
            name,
            str(config.get("command", "-")),
            " ".join(str(a) for a in config.get("args", [])),
        )
    console.print(table)


@app.command()
def add(
    tool: ToolArgument,
    name: Annotated[str, typer.Argument(help="Server name.")],
    command: Annotated[str, typer.Option("--command", "-c", help="Executable to run.")],
    args: Annotated[
        list[str] | None,
        typer.Option("--arg", "-a", help="Argument (repeatable)."),
    ] = None,
    env: Annotated[
        list[str] | None,
        typer.Option("--env", "-e", help="KEY=VALUE environment entry (repeatable)."),
    ] = None,
) -> None:
    """Add or replace an MCP server."""
    config: dict[str, object] = {"command": command}
    if args:
        config["args"] = list(args)
    variables = parse_key_values(env)
    if variables:
        config["env"] = variables

    try:
        add_mcp_server(tool, name, config)
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Added MCP server '{name}'")


@app.command()
def remove(
    tool: ToolArgument,
    name: Annotated[str, typer.Argument(help="Server name.")],
) -> None:
    """Remove an MCP server."""
    try:
        remove_mcp_server(tool, name)
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Removed MCP server '{name}'")


@app.command()
def presets(
    tool: ToolArgument,
    names: Annotated[
        list[str] | None,
        typer.Argument(help="Presets to install. Lists the presets when omitted."),
    ] = None,
) -> None:
    """List or install bundled MCP server presets."""
    if not names:
        table = create_table("MCP presets", "Name", "Command")
        for name, config in MCP_SERVER_PRESETS.items():
            table.add_row(name, " ".join([config["command"], *config.get("args", [])]))
        console.print(table)
        return

    try:
        installed = install_mcp_presets(tool, names)
    except AgentctlError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Installed {', '.join(installed)}")
