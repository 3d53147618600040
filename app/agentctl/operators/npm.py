"""npm install operator.

Installs tools as global npm packages, wrapping the command with sudo
when the global prefix is not writable.
"""

from agentctl.core.platform import command_exists, wrap_with_elevation
from agentctl.models.tool import InstallMethod, ToolSpec
from agentctl.operators.base import InstallOperator


class NpmOperator(InstallOperator):
    """Operator for global npm packages."""

    @property
    def method(self) -> InstallMethod:
        """Return npm as the install method."""
        return InstallMethod.NPM

    def is_available(self) -> bool:
        """Check if npm is available."""
        return command_exists("npm")

    def install_command(self, spec: ToolSpec) -> tuple[list[str], bool]:
        return wrap_with_elevation(["npm", "install", "-g", spec.npm_package])

    def uninstall_command(self, spec: ToolSpec) -> tuple[list[str], bool]:
        return wrap_with_elevation(["npm", "uninstall", "-g", spec.npm_package])
