"""Interactive prompts used by the install flow."""

import typer
from rich.prompt import Prompt

from agentctl.models.install import InstallResult, MethodOption
from agentctl.models.tool import InstallMethod
from agentctl.utils.formatting import console

CANCEL_CHOICE = "0"


def prompt_install_method(options: list[MethodOption]) -> InstallMethod | None:
    """Ask the user to pick an install method.

    Args:
        options: Selectable methods, in display order.

    Returns:
        The chosen method, or None if the user cancelled.
    """
    console.print("[header]Select an installation method:[/]")
    for index, option in enumerate(options, start=1):
        tag = " [recommended]\\[recommended][/]" if option.recommended else ""
        console.print(f"  {index}. {option.method.label}{tag}")
    console.print(f"  {CANCEL_CHOICE}. Cancel", style="muted")

    choices = [CANCEL_CHOICE, *(str(i) for i in range(1, len(options) + 1))]
    answer = Prompt.ask("Method", choices=choices, default="1", console=console)
    if answer == CANCEL_CHOICE:
        return None
    return options[int(answer) - 1].method


def confirm_retry(result: InstallResult) -> bool:
    """Ask whether to try another install method after a failure."""
    return typer.confirm(f"Install via {result.method} failed. Try another method?", default=True)
