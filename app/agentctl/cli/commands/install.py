"""Install command.

Installs a tool with an interactively selected method and offers to retry
with another method when an attempt fails.
"""

from typing import Annotated

import typer

from agentctl.cli.types import ToolArgument
from agentctl.core.session import SessionState, install_tool


def install(
    tool: ToolArgument,
    npm: Annotated[
        bool,
        typer.Option(
            "--npm",
            help="Skip method selection and install with npm.",
        ),
    ] = False,
) -> None:
    """Install a tool.

    Examples:
        agentctl install claude-code        # Choose a method interactively
        agentctl install codex --npm        # Install with npm directly
    """
    result = install_tool(tool, skip_method_selection=npm)

    if result.state == SessionState.DONE_FAILURE:
        raise typer.Exit(code=1)
