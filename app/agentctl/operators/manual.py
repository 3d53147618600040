"""Manual binary removal.

Used to uninstall tools that were installed by a vendor script or whose
install method cannot be determined: the binary is located on PATH and
deleted directly.
"""

import logging
import subprocess

from agentctl.core.errors import ExecutionError
from agentctl.core.platform import detect_platform, wrap_with_elevation
from agentctl.models.install import InstallResult, UninstallMethod
from agentctl.models.tool import Platform, ToolSpec
from agentctl.utils.shell import run_command, run_or_raise

logger = logging.getLogger(__name__)


class ManualRemovalOperator:
    """Locate a tool binary and delete it.

    Failing to locate the binary is a hard failure; there is no fallback
    to another strategy.
    """

    # Timeout for lookup and delete commands
    _TIMEOUT: float = 30.0

    def __init__(self, platform: Platform | None = None) -> None:
        """Initialize the operator.

        Args:
            platform: Platform to build commands for. Detected if omitted.
        """
        self._platform = platform or detect_platform()

    def locate(self, spec: ToolSpec) -> str | None:
        """Find the tool binary with ``which`` (or ``where`` on Windows).

        Args:
            spec: Tool whose binary to find.

        Returns:
            First path reported by the lookup command, or None.
        """
        finder = "where" if self._platform == Platform.WINDOWS else "which"
        try:
            result = run_command([finder, spec.command], timeout=self._TIMEOUT)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("%s %s failed: %s", finder, spec.command, e)
            return None

        if not result.success:
            return None

        lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        return lines[0] if lines else None

    def delete_command(self, path: str) -> tuple[list[str], bool]:
        """Build the argv that deletes a binary.

        Args:
            path: Absolute path of the binary.

        Returns:
            Tuple of (argv, whether sudo was added).
        """
        if self._platform == Platform.WINDOWS:
            return ["cmd", "/c", f'del /f /q "{path}"'], False
        return wrap_with_elevation(["rm", "-f", path])

    def uninstall(self, spec: ToolSpec) -> InstallResult:
        """Remove a tool binary from disk.

        Args:
            spec: Tool to remove.

        Returns:
            InstallResult with method ``manual``.
        """
        path = self.locate(spec)
        if path is None:
            return InstallResult(
                tool=spec.tool,
                method=UninstallMethod.MANUAL.value,
                success=False,
                error=f"Could not locate the {spec.command} binary",
            )

        args, used_sudo = self.delete_command(path)
        logger.info("Removing %s binary at %s", spec.display_name, path)
        try:
            run_or_raise(args, timeout=self._TIMEOUT)
        except ExecutionError as e:
            return InstallResult(
                tool=spec.tool,
                method=UninstallMethod.MANUAL.value,
                success=False,
                error=str(e),
                used_sudo=used_sudo,
            )

        return InstallResult(
            tool=spec.tool,
            method=UninstallMethod.MANUAL.value,
            success=True,
            message=f"Removed {path}",
            used_sudo=used_sudo,
        )
