"""Abstract base class for install operators.

This module defines the InstallOperator interface that every install
method implementation must provide.
"""

import logging
import subprocess
from abc import ABC, abstractmethod

from agentctl.core.errors import ExecutionError
from agentctl.models.install import InstallResult
from agentctl.models.tool import InstallMethod, ToolSpec
from agentctl.utils.shell import CommandResult, run_command

logger = logging.getLogger(__name__)


class InstallOperator(ABC):
    """Abstract base class for all install operators.

    An operator knows how to obtain and remove a tool binary through one
    install method. Each call spawns exactly one external command.

    Example:
        >>> operator = NpmOperator()
        >>> if operator.is_available():
        ...     result = operator.install(get_tool_spec(TargetTool.CODEX))
        ...     print(result.success)
    """

    # Network installs may take a while; fail instead of hanging forever
    timeout: float = 600.0

    @property
    @abstractmethod
    def method(self) -> InstallMethod:
        """Return the install method this operator implements."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the underlying installer is present on the system."""

    @abstractmethod
    def install_command(self, spec: ToolSpec) -> tuple[list[str], bool]:
        """Build the install argv for a tool.

        Args:
            spec: Tool to install.

        Returns:
            Tuple of (argv, whether sudo was added).
        """

    @abstractmethod
    def uninstall_command(self, spec: ToolSpec) -> tuple[list[str], bool]:
        """Build the uninstall argv for a tool.

        Args:
            spec: Tool to remove.

        Returns:
            Tuple of (argv, whether sudo was added).
        """

    def install(self, spec: ToolSpec) -> InstallResult:
        """Install a tool with this operator's method.

        Args:
            spec: Tool to install.

        Returns:
            InstallResult describing the outcome. Never raises for command
            failures.
        """
        args, used_sudo = self.install_command(spec)
        logger.info("Installing %s via %s: %s", spec.display_name, self.method.value, args)
        return self._run(spec, args, used_sudo, success_message="Installed")

    def uninstall(self, spec: ToolSpec) -> InstallResult:
        """Remove a tool with this operator's method.

        Args:
            spec: Tool to remove.

        Returns:
            InstallResult describing the outcome.
        """
        args, used_sudo = self.uninstall_command(spec)
        logger.info("Uninstalling %s via %s: %s", spec.display_name, self.method.value, args)
        return self._run(spec, args, used_sudo, success_message="Uninstalled")

    def _run(
        self,
        spec: ToolSpec,
        args: list[str],
        used_sudo: bool,
        success_message: str,
    ) -> InstallResult:
        try:
            result = self._execute(args)
        except ExecutionError as e:
            logger.warning("%s failed: %s", self.method.value, e)
            return InstallResult(
                tool=spec.tool,
                method=self.method.value,
                success=False,
                error=str(e),
                used_sudo=used_sudo,
            )

        if result.success:
            return InstallResult(
                tool=spec.tool,
                method=self.method.value,
                success=True,
                message=success_message,
                used_sudo=used_sudo,
            )

        error_msg = result.stderr.strip() or f"{args[0]} exited with code {result.returncode}"
        return InstallResult(
            tool=spec.tool,
            method=self.method.value,
            success=False,
            error=error_msg,
            used_sudo=used_sudo,
        )

    def _execute(self, args: list[str]) -> CommandResult:
        """Run a command, converting spawn failures and timeouts.

        Raises:
            ExecutionError: If the command cannot be spawned or times out.
        """
        try:
            return run_command(args, timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            msg = f"{args[0]} timed out after {self.timeout:.0f}s"
            raise ExecutionError(msg, args_list=args) from e
        except OSError as e:
            msg = f"Could not run {args[0]}: {e}"
            raise ExecutionError(msg, args_list=args) from e
