"""Install and uninstall execution.

Resolves the requested install method against the tool, dispatches to
the matching operator, and keeps the tool's install record up to date so
a later uninstall can pick the right removal strategy.
"""

import logging
import os
import re
import shutil
import subprocess
from dataclasses import dataclass

from agentctl.core.errors import ConfigIOError
from agentctl.core.paths import get_claude_local_binary_path
from agentctl.core.platform import command_exists, detect_platform
from agentctl.models.install import (
    MANUAL_RECORD,
    NATIVE_RECORD,
    InstallResult,
    MethodResolution,
    UninstallMethod,
    parse_record_value,
    record_value_for,
)
from agentctl.models.tool import InstallMethod, Platform, TargetTool, get_tool_spec
from agentctl.operators import (
    HomebrewOperator,
    ManualRemovalOperator,
    NpmOperator,
    get_operator,
)
from agentctl.settings.store import get_record_document
from agentctl.utils.shell import run_command

logger = logging.getLogger(__name__)

INSTALL_RECORD_KEY = "installMethod"

_VERSION_PATTERN = re.compile(r"(\d+\.\d+\.\d+)")

# Script installs leave no package manager entry behind
_SCRIPT_METHODS = frozenset({InstallMethod.CURL, InstallMethod.POWERSHELL, InstallMethod.CMD})


def resolve_install_method(method: InstallMethod, tool: TargetTool) -> MethodResolution:
    """Decide which method actually runs for a (method, tool) request.

    Methods the tool does not support resolve to the tool's fallback
    method instead of failing.

    Args:
        method: Requested install method.
        tool: Tool to install.

    Returns:
        MethodResolution with the requested and effective method.
    """
    spec = get_tool_spec(tool)
    if spec.supports(method):
        return MethodResolution(requested=method, effective=method)
    return MethodResolution(requested=method, effective=spec.fallback_method)


def is_installed(tool: TargetTool) -> bool:
    """Check if a tool's binary is on PATH (or a well-known location)."""
    return command_exists(get_tool_spec(tool).command)


def detect_installed_version(tool: TargetTool) -> str | None:
    """Return the installed version of a tool.

    Runs ``<binary> --version`` and extracts the first ``X.Y.Z`` from its
    output; falls back to the trimmed output when there is none.

    Returns:
        Version string, or None if the tool is not installed or the
        command fails.
    """
    command = get_tool_spec(tool).command
    try:
        result = run_command([command, "--version"], timeout=30.0)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("Could not run %s --version: %s", command, e)
        return None

    if not result.success or not result.stdout:
        return None

    match = _VERSION_PATTERN.search(result.stdout)
    if match:
        return match.group(1)
    return result.stdout.strip() or None


@dataclass(frozen=True, slots=True)
class InstallationStatus:
    """Global and local install state of a tool.

    Attributes:
        has_global: Binary found on PATH.
        has_local: Per-user local install present and executable.
        local_path: Where the local install lives.
    """

    has_global: bool
    has_local: bool
    local_path: str


def is_local_installed(tool: TargetTool = TargetTool.CLAUDE_CODE) -> bool:
    """Check if a tool has an executable per-user local installation."""
    if not get_tool_spec(tool).supports_local_install:
        return False
    local_path = get_claude_local_binary_path()
    return local_path.exists() and os.access(local_path, os.X_OK)


def get_installation_status(tool: TargetTool = TargetTool.CLAUDE_CODE) -> InstallationStatus:
    """Report global and local installation state of a tool."""
    return InstallationStatus(
        has_global=is_installed(tool),
        has_local=is_local_installed(tool),
        local_path=str(get_claude_local_binary_path()),
    )


def remove_local_installation() -> bool:
    """Delete the local Claude Code installation directory.

    Returns:
        True if a directory was removed, False if there was none.

    Raises:
        ConfigIOError: If the directory exists but cannot be removed.
    """
    local_dir = get_claude_local_binary_path().parent
    if not local_dir.exists():
        return False

    try:
        shutil.rmtree(local_dir)
    except OSError as e:
        raise ConfigIOError(f"Failed to remove local installation {local_dir}: {e}") from e

    logger.info("Removed local installation at %s", local_dir)
    return True


class InstallExecutor:
    """Runs installs and uninstalls for the managed tools.

    Attributes:
        platform: Platform commands are built for.
    """

    def __init__(self, platform: Platform | None = None) -> None:
        """Initialize the executor.

        Args:
            platform: Platform to target. Detected if omitted.
        """
        self.platform = platform or detect_platform()

    # -------------------------------------------------------------------------
    # Install record
    # -------------------------------------------------------------------------

    def read_install_record(self, tool: TargetTool) -> InstallMethod | str | None:
        """Return the recorded install method of a tool.

        Returns:
            InstallMethod, a legacy marker (``native``/``manual``), or None
            when nothing is recorded or the tool keeps no record.
        """
        document = get_record_document(tool)
        if document is None:
            return None
        data = document.read() or {}
        return parse_record_value(data.get(INSTALL_RECORD_KEY))

    def write_install_record(self, tool: TargetTool, method: InstallMethod) -> bool:
        """Persist the method a tool was installed with.

        A failed write is logged and does not fail the install.

        Returns:
            True if the record was written.
        """
        spec = get_tool_spec(tool)
        document = get_record_document(tool)
        if not spec.records_install_method or document is None:
            return False

        try:
            document.update({INSTALL_RECORD_KEY: record_value_for(method)})
        except ConfigIOError as e:
            logger.warning("Could not save install method for %s: %s", tool.value, e)
            return False
        return True

    # -------------------------------------------------------------------------
    # Install
    # -------------------------------------------------------------------------

    def execute(self, method: InstallMethod, tool: TargetTool) -> InstallResult:
        """Install a tool with one method.

        Unsupported methods are resolved to the tool's fallback first.
        Exactly one external command runs. Failures are returned, never
        raised.

        Args:
            method: Requested install method.
            tool: Tool to install.

        Returns:
            InstallResult; ``method`` is the method that actually ran.
        """
        spec = get_tool_spec(tool)
        resolution = resolve_install_method(method, tool)
        if resolution.fell_back:
            logger.info(
                "%s does not support %s; using %s",
                spec.display_name,
                method.value,
                resolution.effective.value,
            )

        operator = get_operator(resolution.effective)
        try:
            result = operator.install(spec)
        except ValueError as e:
            result = InstallResult(
                tool=tool,
                method=resolution.effective.value,
                success=False,
                error=str(e),
            )

        if result.success:
            self.write_install_record(tool, resolution.effective)

        return InstallResult(
            tool=result.tool,
            method=result.method,
            success=result.success,
            requested=method.value,
            message=result.message,
            error=result.error,
            used_sudo=result.used_sudo,
        )

    # -------------------------------------------------------------------------
    # Uninstall
    # -------------------------------------------------------------------------

    def _homebrew_has(self, tool: TargetTool) -> bool:
        return HomebrewOperator().is_installed(get_tool_spec(tool))

    def resolve_uninstall_method(self, tool: TargetTool) -> UninstallMethod:
        """Pick how to remove a tool.

        Order: the install record, then a Homebrew listing probe, then npm.
        A ``native`` record means Homebrew when the probe finds the tool on
        macOS/Linux, manual removal otherwise. Script and ``manual`` records
        mean manual removal.
        """
        record = self.read_install_record(tool)

        if record is None:
            if self._homebrew_has(tool):
                return UninstallMethod.HOMEBREW
            return UninstallMethod.NPM

        if record == NATIVE_RECORD:
            if self.platform in (Platform.MACOS, Platform.LINUX) and self._homebrew_has(tool):
                return UninstallMethod.HOMEBREW
            return UninstallMethod.MANUAL

        if record == MANUAL_RECORD or record in _SCRIPT_METHODS:
            return UninstallMethod.MANUAL

        if record == InstallMethod.HOMEBREW:
            return UninstallMethod.HOMEBREW
        return UninstallMethod.NPM

    def uninstall(self, tool: TargetTool) -> InstallResult:
        """Remove a tool using the resolved strategy.

        Args:
            tool: Tool to remove.

        Returns:
            InstallResult; ``method`` is the uninstall strategy value.
        """
        spec = get_tool_spec(tool)
        strategy = self.resolve_uninstall_method(tool)
        logger.info("Uninstalling %s with strategy %s", spec.display_name, strategy.value)

        if strategy == UninstallMethod.MANUAL:
            return ManualRemovalOperator(self.platform).uninstall(spec)
        if strategy == UninstallMethod.HOMEBREW:
            return HomebrewOperator().uninstall(spec)
        return NpmOperator().uninstall(spec)
