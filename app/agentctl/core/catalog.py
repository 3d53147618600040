"""Install method catalog.

Maps each (tool, platform) pair to an ordered list of install methods,
most recommended first, and filters the full method set down to what a
platform and tool actually support.
"""

from agentctl.models.install import MethodOption
from agentctl.models.tool import InstallMethod, Platform, TargetTool, get_tool_spec

_NPM = InstallMethod.NPM
_BREW = InstallMethod.HOMEBREW
_CURL = InstallMethod.CURL
_PWSH = InstallMethod.POWERSHELL

# Recommendation order per tool and platform (WSL uses the Linux row)
RECOMMENDATIONS: dict[TargetTool, dict[Platform, list[InstallMethod]]] = {
    TargetTool.CLAUDE_CODE: {
        Platform.MACOS: [_BREW, _CURL, _NPM],
        Platform.LINUX: [_CURL, _NPM],
        Platform.WINDOWS: [_PWSH, _NPM],
    },
    TargetTool.CODEX: {
        Platform.MACOS: [_BREW, _NPM],
        Platform.LINUX: [_NPM],
        Platform.WINDOWS: [_NPM],
    },
    TargetTool.GEMINI: {
        Platform.MACOS: [_BREW, _NPM],
        Platform.LINUX: [_NPM, _BREW],
        Platform.WINDOWS: [_NPM],
    },
}


def recommended_methods(
    tool: TargetTool,
    platform: Platform,
    wsl: bool = False,
) -> list[InstallMethod]:
    """Return install methods for a tool in recommendation order.

    Args:
        tool: Tool to install.
        platform: Detected platform.
        wsl: Whether running under WSL.

    Returns:
        Ordered list of methods, most recommended first.
    """
    if wsl:
        platform = Platform.LINUX
    return list(RECOMMENDATIONS[tool].get(platform, [_NPM]))


def is_platform_compatible(method: InstallMethod, platform: Platform, wsl: bool = False) -> bool:
    """Check if an install method can run on a platform.

    Args:
        method: Install method to check.
        platform: Detected platform.
        wsl: Whether running under WSL.

    Returns:
        True if the method is usable on this platform.
    """
    if method == InstallMethod.HOMEBREW:
        return platform in (Platform.MACOS, Platform.LINUX)
    if method == InstallMethod.CURL:
        return platform != Platform.WINDOWS or wsl
    if method in (InstallMethod.POWERSHELL, InstallMethod.CMD):
        return platform == Platform.WINDOWS
    return True


def available_methods(
    tool: TargetTool,
    platform: Platform,
    wsl: bool = False,
) -> list[MethodOption]:
    """Return every usable install method for a tool on a platform.

    Methods are filtered by platform compatibility and tool support.
    Recommended methods come first in recommendation order, followed by
    the remaining methods in enum order. Only the top recommendation is
    flagged.

    Args:
        tool: Tool to install.
        platform: Detected platform.
        wsl: Whether running under WSL.

    Returns:
        Ordered list of MethodOption.
    """
    spec = get_tool_spec(tool)
    usable = [
        method
        for method in InstallMethod
        if spec.supports(method) and is_platform_compatible(method, platform, wsl)
    ]

    recommended = recommended_methods(tool, platform, wsl)
    top = recommended[0] if recommended else None

    ordered = [m for m in recommended if m in usable]
    ordered.extend(m for m in usable if m not in ordered)

    return [MethodOption(method=m, recommended=m == top) for m in ordered]
