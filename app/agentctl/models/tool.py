"""Target tool and install method models.

This module defines the fixed set of managed tools, the ways they can be
installed, and the static per-tool facts (binary name, package names,
supported methods) that the catalog and executor build on.
"""

from dataclasses import dataclass, field
from enum import Enum


class Platform(str, Enum):
    """Operating system family."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"


class InstallMethod(str, Enum):
    """Ways to obtain a tool binary.

    Attributes:
        NPM: Global install through the npm language package manager.
        HOMEBREW: Install through the Homebrew system package manager.
        CURL: POSIX install script piped from curl into bash.
        POWERSHELL: Windows PowerShell install script.
        CMD: Legacy Windows cmd.exe install script.
    """

    NPM = "npm"
    HOMEBREW = "homebrew"
    CURL = "curl"
    POWERSHELL = "powershell"
    CMD = "cmd"

    @property
    def label(self) -> str:
        """Human-readable method name for prompts."""
        return _METHOD_LABELS[self]


_METHOD_LABELS: dict[InstallMethod, str] = {
    InstallMethod.NPM: "npm (global package)",
    InstallMethod.HOMEBREW: "Homebrew",
    InstallMethod.CURL: "Native installer (curl | bash)",
    InstallMethod.POWERSHELL: "Native installer (PowerShell)",
    InstallMethod.CMD: "Native installer (cmd)",
}


class TargetTool(str, Enum):
    """AI coding assistant CLIs managed by agentctl."""

    CLAUDE_CODE = "claude-code"
    CODEX = "codex"
    GEMINI = "gemini"


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Static facts about a managed tool.

    Attributes:
        tool: The tool this spec describes.
        display_name: Name shown to users.
        command: Binary name on PATH.
        npm_package: Package identifier for npm.
        brew_package: Formula or cask name for Homebrew.
        brew_cask: Whether the Homebrew package is a cask.
        supported_methods: Methods the tool can actually be installed with.
        script_commands: argv for each script install method.
        records_install_method: Whether a successful install is persisted.
        supports_local_install: Whether a per-user local install exists.
        fallback_method: Method used when an unsupported one is requested.
    """

    tool: TargetTool
    display_name: str
    command: str
    npm_package: str
    brew_package: str
    brew_cask: bool = False
    supported_methods: frozenset[InstallMethod] = frozenset(
        {InstallMethod.NPM, InstallMethod.HOMEBREW}
    )
    script_commands: dict[InstallMethod, list[str]] = field(default_factory=lambda: {})
    records_install_method: bool = True
    supports_local_install: bool = False
    fallback_method: InstallMethod = InstallMethod.NPM

    def supports(self, method: InstallMethod) -> bool:
        """Check if the tool can be installed with the given method."""
        return method in self.supported_methods

    def package_for(self, method: InstallMethod) -> str:
        """Return the package identifier for a package-manager method.

        Raises:
            ValueError: If the method is not a package-manager method.
        """
        if method == InstallMethod.NPM:
            return self.npm_package
        if method == InstallMethod.HOMEBREW:
            return self.brew_package
        msg = f"{method.value} is not a package-manager method"
        raise ValueError(msg)


TOOL_SPECS: dict[TargetTool, ToolSpec] = {
    TargetTool.CLAUDE_CODE: ToolSpec(
        tool=TargetTool.CLAUDE_CODE,
        display_name="Claude Code",
        command="claude",
        npm_package="@anthropic-ai/claude-code",
        brew_package="claude-code",
        brew_cask=True,
        supported_methods=frozenset(InstallMethod),
        script_commands={
            InstallMethod.CURL: ["bash", "-c", "curl -fsSL https://claude.ai/install.sh | bash"],
            InstallMethod.POWERSHELL: [
                "powershell",
                "-Command",
                "irm https://claude.ai/install.ps1 | iex",
            ],
            InstallMethod.CMD: [
                "cmd",
                "/c",
                "curl -fsSL https://claude.ai/install.cmd -o install.cmd"
                " && install.cmd && del install.cmd",
            ],
        },
        supports_local_install=True,
    ),
    TargetTool.CODEX: ToolSpec(
        tool=TargetTool.CODEX,
        display_name="Codex",
        command="codex",
        npm_package="@openai/codex",
        brew_package="codex",
        records_install_method=False,
    ),
    TargetTool.GEMINI: ToolSpec(
        tool=TargetTool.GEMINI,
        display_name="Gemini CLI",
        command="gemini",
        npm_package="@google/gemini-cli",
        brew_package="gemini-cli",
    ),
}


def get_tool_spec(tool: TargetTool) -> ToolSpec:
    """Look up the static spec for a tool."""
    return TOOL_SPECS[tool]
