"""Console output and subprocess helpers shared by every layer."""

from agentctl.utils.formatting import (
    console,
    create_table,
    err_console,
    print_error,
    print_hint,
    print_info,
    print_success,
    print_warning,
)
from agentctl.utils.shell import CommandResult, run_command, run_or_raise

__all__ = [
    "CommandResult",
    "console",
    "create_table",
    "err_console",
    "print_error",
    "print_hint",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
    "run_or_raise",
]
