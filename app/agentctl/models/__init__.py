"""Tools, install methods, install outcomes and API profiles."""

from agentctl.models.install import (
    InstallResult,
    MethodOption,
    MethodResolution,
    UninstallMethod,
    parse_record_value,
    record_value_for,
)
from agentctl.models.profile import AuthType, Profile, ProfileCollection
from agentctl.models.tool import (
    TOOL_SPECS,
    InstallMethod,
    Platform,
    TargetTool,
    ToolSpec,
    get_tool_spec,
)

__all__ = [
    "TOOL_SPECS",
    "AuthType",
    "InstallMethod",
    "InstallResult",
    "MethodOption",
    "MethodResolution",
    "Platform",
    "Profile",
    "ProfileCollection",
    "TargetTool",
    "ToolSpec",
    "UninstallMethod",
    "get_tool_spec",
    "parse_record_value",
    "record_value_for",
]
