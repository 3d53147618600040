"""Native installer script operator.

Runs the vendor install script for tools that ship one (curl on POSIX,
PowerShell or cmd on Windows). Scripts have no matching uninstall
command; removal goes through ManualRemovalOperator instead.
"""

from agentctl.core.platform import command_exists
from agentctl.models.tool import InstallMethod, ToolSpec
from agentctl.operators.base import InstallOperator

# Binary that must exist for each script method
_SCRIPT_RUNNERS: dict[InstallMethod, str] = {
    InstallMethod.CURL: "curl",
    InstallMethod.POWERSHELL: "powershell",
    InstallMethod.CMD: "cmd",
}


class ScriptOperator(InstallOperator):
    """Operator for vendor install scripts.

    Attributes:
        method: One of the script install methods.
    """

    def __init__(self, method: InstallMethod) -> None:
        """Initialize the operator.

        Args:
            method: Script install method to run.

        Raises:
            ValueError: If the method is not a script method.
        """
        if method not in _SCRIPT_RUNNERS:
            msg = f"{method.value} is not a script install method"
            raise ValueError(msg)
        self._method = method

    @property
    def method(self) -> InstallMethod:
        """Return the script method this operator runs."""
        return self._method

    def is_available(self) -> bool:
        """Check if the script runner is available."""
        return command_exists(_SCRIPT_RUNNERS[self._method])

    def install_command(self, spec: ToolSpec) -> tuple[list[str], bool]:
        """Return the tool's install script argv.

        Raises:
            ValueError: If the tool ships no script for this method.
        """
        args = spec.script_commands.get(self._method)
        if not args:
            msg = f"{spec.display_name} has no {self._method.value} installer"
            raise ValueError(msg)
        return list(args), False

    def uninstall_command(self, spec: ToolSpec) -> tuple[list[str], bool]:
        """Script installs have no uninstall command.

        Raises:
            ValueError: Always; the tool is removed with ``uninstall --local``
                or by hand.
        """
        msg = f"{self._method.value} installs are removed manually"
        raise ValueError(msg)
