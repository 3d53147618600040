"""Uninstall command.

Removes a tool with the strategy matching how it was installed.
"""

from typing import Annotated

import typer

from agentctl.cli.types import ToolArgument
from agentctl.core.errors import AgentctlError
from agentctl.core.executor import InstallExecutor, remove_local_installation
from agentctl.models.tool import TargetTool, get_tool_spec
from agentctl.utils.formatting import print_error, print_hint, print_info, print_success


def uninstall(
    tool: ToolArgument,
    local: Annotated[
        bool,
        typer.Option(
            "--local",
            help="Remove the local (~/.claude/local) installation instead.",
        ),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt.",
        ),
    ] = False,
) -> None:
    """Uninstall a tool.

    The removal strategy comes from the recorded install method; without a
    record agentctl checks Homebrew and falls back to npm.
    """
    spec = get_tool_spec(tool)

    if local and tool != TargetTool.CLAUDE_CODE:
        print_error(f"{spec.display_name} has no local installation")
        raise typer.Exit(code=1)

    if not yes:
        target = f"the local {spec.display_name} installation" if local else spec.display_name
        if not typer.confirm(f"Uninstall {target}?"):
            print_info("Cancelled.")
            return

    if local:
        try:
            removed = remove_local_installation()
        except AgentctlError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        if removed:
            print_success("Local installation removed")
        else:
            print_info("No local installation found.")
        return

    executor = InstallExecutor()
    result = executor.uninstall(tool)

    if result.used_sudo:
        print_hint("Using sudo")

    if result.success:
        print_success(f"Uninstalled {spec.display_name} ({result.method})")
        return

    print_error(f"Failed to uninstall {spec.display_name} ({result.method})")
    if result.error:
        print_hint(result.error)
    raise typer.Exit(code=1)
