"""Install and uninstall result models.

This module defines the data structures exchanged between the method
catalog, the executor and the selection session.
"""

from dataclasses import dataclass
from enum import Enum

from agentctl.models.tool import InstallMethod, TargetTool

# Install record values written by older releases and by the tools themselves
NPM_GLOBAL_RECORD = "npm-global"
NATIVE_RECORD = "native"
MANUAL_RECORD = "manual"


class UninstallMethod(str, Enum):
    """Strategy used to remove a tool binary.

    Attributes:
        NPM: npm uninstall -g.
        HOMEBREW: brew uninstall.
        MANUAL: Locate the binary on PATH and delete it.
    """

    NPM = "npm"
    HOMEBREW = "homebrew"
    MANUAL = "manual"


@dataclass(frozen=True, slots=True)
class MethodOption:
    """A selectable install method.

    Attributes:
        method: The install method.
        recommended: True only for the single top recommendation.
    """

    method: InstallMethod
    recommended: bool = False


@dataclass(frozen=True, slots=True)
class MethodResolution:
    """Outcome of resolving a requested method against a tool.

    Attributes:
        requested: Method the caller asked for.
        effective: Method that will actually run.
    """

    requested: InstallMethod
    effective: InstallMethod

    @property
    def fell_back(self) -> bool:
        """Check if the requested method was replaced by the fallback."""
        return self.requested != self.effective


@dataclass(frozen=True, slots=True)
class InstallResult:
    """Result of an install or uninstall attempt.

    Attributes:
        tool: Tool that was operated on.
        method: Method that actually ran (after fallback resolution), or the
            uninstall strategy value for removals.
        success: Whether the external command succeeded.
        requested: Method the caller originally asked for.
        message: Optional success message or additional information.
        error: Optional error message if the attempt failed.
        used_sudo: Whether the command was wrapped with sudo.
    """

    tool: TargetTool
    method: str
    success: bool
    requested: str | None = None
    message: str | None = None
    error: str | None = None
    used_sudo: bool = False

    @property
    def failed(self) -> bool:
        """Check if the attempt failed."""
        return not self.success


def record_value_for(method: InstallMethod) -> str:
    """Return the value persisted in the install record for a method.

    npm installs are recorded as ``npm-global`` so the tools' own
    auto-updaters recognise them.
    """
    if method == InstallMethod.NPM:
        return NPM_GLOBAL_RECORD
    return method.value


def parse_record_value(raw: object) -> InstallMethod | str | None:
    """Interpret a persisted install record.

    Args:
        raw: Value of the ``installMethod`` field, possibly missing.

    Returns:
        The matching InstallMethod, a legacy marker string
        (``native`` or ``manual``), or None when nothing usable is recorded.
    """
    if not isinstance(raw, str) or not raw:
        return None
    if raw == NPM_GLOBAL_RECORD:
        return InstallMethod.NPM
    if raw in (NATIVE_RECORD, MANUAL_RECORD):
        return raw
    try:
        return InstallMethod(raw)
    except ValueError:
        return None
