"""Subprocess helpers.

Installers and the managed CLIs are only ever reached through argv,
exit code and captured output. Nothing is run through a shell unless the
argv itself starts one (the vendor install scripts).
"""

import logging
import shlex
import subprocess
from dataclasses import dataclass

from agentctl.core.errors import ExecutionError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a finished process."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """stderr if the process wrote any, else stdout (stripped)."""
        return self.stderr.strip() or self.stdout.strip()


def run_command(args: list[str], *, timeout: float | None = DEFAULT_TIMEOUT) -> CommandResult:
    """Run a process to completion and capture its output.

    stdin is closed so an installer that unexpectedly prompts fails
    instead of hanging until the timeout. Undecodable output bytes are
    replaced.

    Args:
        args: argv of the process.
        timeout: Seconds before the process is killed, None to wait forever.

    Returns:
        CommandResult with stdout, stderr and exit code.

    Raises:
        subprocess.TimeoutExpired: If the process exceeds the timeout.
        OSError: If the executable cannot be started (e.g. FileNotFoundError).
    """
    logger.debug("Running: %s", shlex.join(args))
    completed = subprocess.run(
        args,
        stdin=subprocess.DEVNULL,
        capture_output=True,
        text=True,
        errors="replace",
        timeout=timeout,
    )
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def run_or_raise(args: list[str], *, timeout: float | None = DEFAULT_TIMEOUT) -> CommandResult:
    """Run a process and turn any failure into ExecutionError.

    Raises:
        ExecutionError: On a non-zero exit, a timeout, or when the process
            cannot be started.
    """
    try:
        result = run_command(args, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise ExecutionError(
            f"'{shlex.join(args)}' timed out after {timeout:.0f}s", args_list=args
        ) from e
    except OSError as e:
        raise ExecutionError(f"Could not run {args[0]}: {e}", args_list=args) from e

    if result.success:
        return result
    raise ExecutionError(
        f"'{shlex.join(args)}' exited with {result.returncode}: {result.output or 'no output'}",
        args_list=args,
        returncode=result.returncode,
        stderr=result.stderr,
    )
