"""Unit tests for MCP server and custom command registries."""

import json
import tomllib
from pathlib import Path

import pytest
from agentctl.core.errors import ConfigValidationError, NotFoundError
from agentctl.models.tool import TargetTool
from agentctl.settings.registry import (
    MCP_SERVER_PRESETS,
    add_custom_command,
    add_mcp_server,
    get_custom_command,
    get_mcp_server,
    install_mcp_presets,
    list_custom_commands,
    list_mcp_servers,
    remove_custom_command,
    remove_mcp_server,
)


class TestMcpServers:
    """Tests for MCP server management."""

    def test_empty_when_no_file(self, home: Path) -> None:
        """No settings file means no servers."""
        assert list_mcp_servers(TargetTool.GEMINI) == {}

    def test_claude_servers_in_state_file(self, home: Path) -> None:
        """Claude Code servers are stored in ~/.claude.json."""
        add_mcp_server(TargetTool.CLAUDE_CODE, "fs", {"command": "npx", "args": ["fs"]})

        data = json.loads((home / ".claude.json").read_text())
        assert data["mcpServers"] == {"fs": {"command": "npx", "args": ["fs"]}}

    def test_codex_servers_in_toml(self, home: Path) -> None:
        """Codex servers are stored under mcp_servers in config.toml."""
        add_mcp_server(TargetTool.CODEX, "fs", {"command": "npx"})

        with open(home / ".codex" / "config.toml", "rb") as f:
            assert tomllib.load(f)["mcp_servers"] == {"fs": {"command": "npx"}}

    def test_add_preserves_other_settings(self, home: Path) -> None:
        """Adding a server keeps the rest of the document."""
        settings = home / ".gemini" / "settings.json"
        settings.parent.mkdir()
        settings.write_text(json.dumps({"ui": {"theme": "dark"}, "mcpServers": {"a": {}}}))

        add_mcp_server(TargetTool.GEMINI, "b", {"command": "uvx"})

        data = json.loads(settings.read_text())
        assert data["ui"] == {"theme": "dark"}
        assert set(data["mcpServers"]) == {"a", "b"}

    def test_add_requires_command(self, home: Path) -> None:
        """A server without a command is rejected."""
        with pytest.raises(ConfigValidationError, match="needs a command"):
            add_mcp_server(TargetTool.GEMINI, "broken", {"args": []})

    def test_add_requires_name(self, home: Path) -> None:
        """A blank name is rejected."""
        with pytest.raises(ConfigValidationError):
            add_mcp_server(TargetTool.GEMINI, "  ", {"command": "npx"})

    def test_get_and_remove(self, home: Path) -> None:
        """A server can be read back and removed."""
        add_mcp_server(TargetTool.CODEX, "fs", {"command": "npx"})

        assert get_mcp_server(TargetTool.CODEX, "fs") == {"command": "npx"}

        remove_mcp_server(TargetTool.CODEX, "fs")

        assert list_mcp_servers(TargetTool.CODEX) == {}

    def test_remove_unknown(self, home: Path) -> None:
        """Removing an unknown server raises NotFoundError."""
        with pytest.raises(NotFoundError, match="'ghost'"):
            remove_mcp_server(TargetTool.CLAUDE_CODE, "ghost")


class TestMcpPresets:
    """Tests for bundled MCP presets."""

    def test_install_presets(self, home: Path) -> None:
        """Presets are copied into the registry."""
        installed = install_mcp_presets(TargetTool.GEMINI, ["github", "slack"])

        servers = list_mcp_servers(TargetTool.GEMINI)
        assert installed == ["github", "slack"]
        assert servers["github"] == MCP_SERVER_PRESETS["github"]
        assert servers["slack"] == MCP_SERVER_PRESETS["slack"]

    def test_unknown_preset_writes_nothing(self, home: Path) -> None:
        """An unknown name aborts before anything is written."""
        with pytest.raises(NotFoundError, match="nope"):
            install_mcp_presets(TargetTool.CLAUDE_CODE, ["github", "nope"])

        assert not (home / ".claude.json").exists()


class TestCustomCommands:
    """Tests for Gemini custom commands."""

    def test_add_and_list(self, home: Path) -> None:
        """Commands are stored under customCommands."""
        add_custom_command("review", {"prompt": "Review this", "includeContext": True})

        assert list_custom_commands() == {
            "review": {"prompt": "Review this", "includeContext": True}
        }
        assert get_custom_command("review")["prompt"] == "Review this"

    def test_add_requires_prompt(self, home: Path) -> None:
        """A command without a prompt is rejected."""
        with pytest.raises(ConfigValidationError, match="needs a prompt"):
            add_custom_command("empty", {"prompt": "  "})

    def test_remove(self, home: Path) -> None:
        """Removing a command leaves the others."""
        add_custom_command("a", {"prompt": "A"})
        add_custom_command("b", {"prompt": "B"})

        remove_custom_command("a")

        assert list(list_custom_commands()) == ["b"]

    def test_remove_unknown(self, home: Path) -> None:
        """Removing an unknown command raises NotFoundError."""
        with pytest.raises(NotFoundError):
            remove_custom_command("ghost")
