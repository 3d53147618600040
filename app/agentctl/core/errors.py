"""Exception hierarchy for agentctl.

All library errors derive from AgentctlError so CLI commands can catch
a single base class and report the message.
"""


class AgentctlError(Exception):
    """Base exception for all agentctl errors."""


class ConfigValidationError(AgentctlError):
    """Raised when user input is invalid (missing field, duplicate name)."""


class NotFoundError(AgentctlError):
    """Raised when a tool, profile, server or command does not exist."""


class ProfileNotFoundError(NotFoundError, ConfigValidationError):
    """Raised when a profile id is not present in the collection.

    An unknown profile id is both a lookup failure and invalid input,
    so callers may catch either base class.
    """


class ExecutionError(AgentctlError):
    """Raised when an external command fails or cannot be spawned.

    Attributes:
        args_list: The argv that was executed.
        returncode: Exit code of the command, None if it never started.
        stderr: Captured standard error output.
    """

    def __init__(
        self,
        message: str,
        *,
        args_list: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.args_list = list(args_list or [])
        self.returncode = returncode
        self.stderr = stderr


class ConfigIOError(AgentctlError):
    """Raised when a config file is unreadable, corrupt or unwritable."""
