"""Named-entry registries inside settings documents.

MCP servers exist for every tool (in a different document and under a
different key per tool); custom commands exist for Gemini only. Entries
are added and removed through SettingsDocument.update so the rest of the
document is preserved.
"""

import logging
from typing import Any

from agentctl.core.errors import ConfigValidationError, NotFoundError
from agentctl.models.tool import TargetTool
from agentctl.settings.store import DocumentKind, SettingsDocument, get_document

logger = logging.getLogger(__name__)

# Where each tool keeps its MCP server registry
_MCP_LOCATIONS: dict[TargetTool, tuple[DocumentKind, str]] = {
    TargetTool.CLAUDE_CODE: (DocumentKind.STATE, "mcpServers"),
    TargetTool.CODEX: (DocumentKind.CONFIG, "mcp_servers"),
    TargetTool.GEMINI: (DocumentKind.SETTINGS, "mcpServers"),
}

_CUSTOM_COMMANDS_KEY = "customCommands"

MCP_SERVER_PRESETS: dict[str, dict[str, Any]] = {
    "github": {
        "command": "npx",
        "args": ["-y", "@modelcontextprotocol/server-github"],
        "env": {"GITHUB_TOKEN": "${GITHUB_TOKEN}"},
    },
    "filesystem": {
        "command": "npx",
        "args": ["-y", "@modelcontextprotocol/server-filesystem", "/path/to/allowed/files"],
    },
    "postgres": {
        "command": "npx",
        "args": ["-y", "@modelcontextprotocol/server-postgres", "postgresql://localhost/mydb"],
    },
    "puppeteer": {
        "command": "npx",
        "args": ["-y", "@modelcontextprotocol/server-puppeteer"],
    },
    "slack": {
        "command": "npx",
        "args": ["-y", "@modelcontextprotocol/server-slack"],
        "env": {"SLACK_BOT_TOKEN": "${SLACK_BOT_TOKEN}"},
    },
    "serena": {
        "command": "npx",
        "args": ["-y", "@serenaai/mcp"],
    },
}

CUSTOM_COMMAND_TEMPLATES: dict[str, dict[str, Any]] = {
    "code-review": {
        "prompt": (
            "Review the code in the current file for potential issues, "
            "best practices, and improvements"
        ),
        "includeContext": True,
        "parameters": {"focusAreas": ["security", "performance", "maintainability"]},
    },
    "explain-code": {
        "prompt": (
            "Explain the code in the current file in detail, including its "
            "purpose, structure, and key concepts"
        ),
        "includeContext": True,
    },
    "generate-tests": {
        "prompt": "Generate comprehensive unit tests for the code in the current file",
        "includeContext": True,
        "parameters": {"framework": "auto-detect"},
    },
    "refactor": {
        "prompt": (
            "Suggest refactoring improvements for the code in the current file "
            "to improve readability and maintainability"
        ),
        "includeContext": True,
    },
    "add-docs": {
        "prompt": "Add comprehensive documentation comments to the code in the current file",
        "includeContext": True,
    },
    "find-bugs": {
        "prompt": "Analyze the code for potential bugs, edge cases, and error handling issues",
        "includeContext": True,
    },
    "optimize": {
        "prompt": "Suggest performance optimizations for the code in the current file",
        "includeContext": True,
    },
}


def _mcp_document(tool: TargetTool) -> tuple[SettingsDocument, str]:
    kind, key = _MCP_LOCATIONS[tool]
    return get_document(tool, kind), key


def _entries(document: SettingsDocument, key: str) -> dict[str, Any]:
    data = document.read() or {}
    entries = data.get(key)
    return dict(entries) if isinstance(entries, dict) else {}


# =============================================================================
# MCP servers
# =============================================================================


def list_mcp_servers(tool: TargetTool) -> dict[str, Any]:
    """Return the MCP servers configured for a tool, keyed by name."""
    document, key = _mcp_document(tool)
    return _entries(document, key)


def get_mcp_server(tool: TargetTool, name: str) -> dict[str, Any]:
    """Return one MCP server entry.

    Raises:
        NotFoundError: If no server with that name is configured.
    """
    servers = list_mcp_servers(tool)
    if name not in servers:
        raise NotFoundError(f"MCP server '{name}' is not configured for {tool.value}")
    return servers[name]


def add_mcp_server(tool: TargetTool, name: str, config: dict[str, Any]) -> dict[str, Any]:
    """Add or replace an MCP server entry.

    Args:
        tool: Tool to configure.
        name: Server name.
        config: Entry with at least a ``command``.

    Returns:
        The stored entry.

    Raises:
        ConfigValidationError: If name or command is empty.
    """
    if not name.strip():
        raise ConfigValidationError("MCP server name is required")
    if not str(config.get("command", "")).strip():
        raise ConfigValidationError(f"MCP server '{name}' needs a command")

    document, key = _mcp_document(tool)
    document.update({key: {name: config}})
    logger.info("Added MCP server %s to %s", name, tool.value)
    return config


def remove_mcp_server(tool: TargetTool, name: str) -> None:
    """Remove an MCP server entry.

    Raises:
        NotFoundError: If no server with that name is configured.
    """
    get_mcp_server(tool, name)
    document, key = _mcp_document(tool)
    document.update({key: {name: None}})
    logger.info("Removed MCP server %s from %s", name, tool.value)


def install_mcp_presets(tool: TargetTool, names: list[str]) -> list[str]:
    """Add bundled MCP server presets in one write.

    Args:
        tool: Tool to configure.
        names: Preset names.

    Returns:
        Names that were installed.

    Raises:
        NotFoundError: If any name is not a known preset. Nothing is
            written in that case.
    """
    unknown = [n for n in names if n not in MCP_SERVER_PRESETS]
    if unknown:
        raise NotFoundError(f"Unknown MCP preset(s): {', '.join(unknown)}")
    if not names:
        return []

    document, key = _mcp_document(tool)
    document.update({key: {n: MCP_SERVER_PRESETS[n] for n in names}})
    return list(names)


# =============================================================================
# Gemini custom commands
# =============================================================================


def _commands_document() -> SettingsDocument:
    return get_document(TargetTool.GEMINI, DocumentKind.SETTINGS)


def list_custom_commands() -> dict[str, Any]:
    """Return the Gemini custom commands, keyed by name."""
    return _entries(_commands_document(), _CUSTOM_COMMANDS_KEY)


def get_custom_command(name: str) -> dict[str, Any]:
    """Return one Gemini custom command.

    Raises:
        NotFoundError: If no command with that name exists.
    """
    commands = list_custom_commands()
    if name not in commands:
        raise NotFoundError(f"Custom command '{name}' does not exist")
    return commands[name]


def add_custom_command(name: str, config: dict[str, Any]) -> dict[str, Any]:
    """Add or replace a Gemini custom command.

    Raises:
        ConfigValidationError: If name or prompt is empty.
    """
    if not name.strip():
        raise ConfigValidationError("Custom command name is required")
    if not str(config.get("prompt", "")).strip():
        raise ConfigValidationError(f"Custom command '{name}' needs a prompt")

    _commands_document().update({_CUSTOM_COMMANDS_KEY: {name: config}})
    return config


def remove_custom_command(name: str) -> None:
    """Remove a Gemini custom command.

    Raises:
        NotFoundError: If no command with that name exists.
    """
    get_custom_command(name)
    _commands_document().update({_CUSTOM_COMMANDS_KEY: {name: None}})
