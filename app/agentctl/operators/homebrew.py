"""Homebrew install operator.

Installs tools as Homebrew formulae or casks. Homebrew refuses to run
as root, so commands are never wrapped with sudo.
"""

import logging
import subprocess

from agentctl.core.platform import command_exists
from agentctl.models.tool import InstallMethod, ToolSpec
from agentctl.operators.base import InstallOperator
from agentctl.utils.shell import run_command

logger = logging.getLogger(__name__)


class HomebrewOperator(InstallOperator):
    """Operator for Homebrew formulae and casks."""

    # Timeout for the ``brew list`` installation probe
    _PROBE_TIMEOUT: float = 30.0

    @property
    def method(self) -> InstallMethod:
        """Return Homebrew as the install method."""
        return InstallMethod.HOMEBREW

    def is_available(self) -> bool:
        """Check if brew is available."""
        return command_exists("brew")

    def _package_args(self, spec: ToolSpec) -> list[str]:
        if spec.brew_cask:
            return ["--cask", spec.brew_package]
        return [spec.brew_package]

    def install_command(self, spec: ToolSpec) -> tuple[list[str], bool]:
        return ["brew", "install", *self._package_args(spec)], False

    def uninstall_command(self, spec: ToolSpec) -> tuple[list[str], bool]:
        return ["brew", "uninstall", *self._package_args(spec)], False

    def is_installed(self, spec: ToolSpec) -> bool:
        """Check if Homebrew lists the tool as installed.

        Args:
            spec: Tool to probe.

        Returns:
            True if ``brew list`` exits 0 for the tool's package.
        """
        args = ["brew", "list", *self._package_args(spec)]
        try:
            result = run_command(args, timeout=self._PROBE_TIMEOUT)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Homebrew probe for %s failed: %s", spec.brew_package, e)
            return False
        return result.success
