"""Unit tests for the profile commands.

These run against real files in a temporary HOME and XDG config
directory.
"""

import json
from pathlib import Path

import pytest
from agentctl.cli.main import app
from agentctl.models.tool import TargetTool
from agentctl.profiles.store import ProfileStore
from typer.testing import CliRunner

runner = CliRunner()


def _claude_env(settings: Path) -> dict[str, str]:
    return json.loads(settings.read_text())["env"]


class TestProfileAdd:
    """Tests for agentctl profile add."""

    def test_first_profile_is_applied(self, claude_settings: Path) -> None:
        """The first profile becomes current and is written to settings."""
        result = runner.invoke(
            app, ["profile", "add", "claude-code", "Work", "-k", "sk-ant-work-key"]
        )

        assert result.exit_code == 0, result.output
        assert "Added profile 'Work' (work)" in result.output
        assert _claude_env(claude_settings)["ANTHROPIC_API_KEY"] == "sk-ant-work-key"

    def test_second_profile_not_applied(self, claude_settings: Path) -> None:
        """Adding another profile keeps the current settings."""
        runner.invoke(app, ["profile", "add", "claude-code", "Work", "-k", "sk-one"])
        result = runner.invoke(app, ["profile", "add", "claude-code", "Home", "-k", "sk-two"])

        assert result.exit_code == 0
        assert _claude_env(claude_settings)["ANTHROPIC_API_KEY"] == "sk-one"

    def test_switch_flag_applies(self, claude_settings: Path) -> None:
        """--switch makes the new profile current."""
        runner.invoke(app, ["profile", "add", "claude-code", "Work", "-k", "sk-one"])
        result = runner.invoke(
            app, ["profile", "add", "claude-code", "Home", "-k", "sk-two", "--switch"]
        )

        assert result.exit_code == 0
        assert _claude_env(claude_settings)["ANTHROPIC_API_KEY"] == "sk-two"

    def test_from_provider(self, claude_settings: Path) -> None:
        """--provider fills the endpoint from a preset."""
        result = runner.invoke(
            app, ["profile", "add", "claude-code", "GLM", "-p", "glm", "-k", "k"]
        )

        assert result.exit_code == 0, result.output
        env = _claude_env(claude_settings)
        assert env["ANTHROPIC_AUTH_TOKEN"] == "k"
        assert env["ANTHROPIC_BASE_URL"] == "https://open.bigmodel.cn/api/anthropic"

    def test_duplicate_name(self, home: Path) -> None:
        """A duplicate name exits 1."""
        runner.invoke(app, ["profile", "add", "codex", "Work", "-k", "k1"])
        result = runner.invoke(app, ["profile", "add", "codex", "Work", "-k", "k2"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_missing_key(self, home: Path) -> None:
        """An API key profile without a key exits 1."""
        result = runner.invoke(app, ["profile", "add", "gemini", "Work"])

        assert result.exit_code == 1


class TestProfileSwitchAndDelete:
    """Tests for switching and deleting profiles."""

    @pytest.fixture
    def two_profiles(self, home: Path) -> Path:
        """Add Work (current) and Home."""
        runner.invoke(app, ["profile", "add", "claude-code", "Work", "-k", "sk-one"])
        runner.invoke(app, ["profile", "add", "claude-code", "Home", "-k", "sk-two"])
        return home

    def test_switch(self, two_profiles: Path, claude_settings: Path) -> None:
        """switch applies the chosen profile."""
        result = runner.invoke(app, ["profile", "switch", "claude-code", "home"])

        assert result.exit_code == 0
        assert _claude_env(claude_settings)["ANTHROPIC_API_KEY"] == "sk-two"

    def test_switch_unknown(self, two_profiles: Path) -> None:
        """Switching to an unknown id exits 1 and keeps the current profile."""
        result = runner.invoke(app, ["profile", "switch", "claude-code", "ghost"])

        assert result.exit_code == 1
        current = ProfileStore().get_current_profile(TargetTool.CLAUDE_CODE)
        assert current is not None and current.id == "work"

    def test_delete_current_applies_next(self, two_profiles: Path, claude_settings: Path) -> None:
        """Deleting the current profile applies the remaining one."""
        result = runner.invoke(app, ["profile", "delete", "claude-code", "work", "-y"])

        assert result.exit_code == 0
        assert _claude_env(claude_settings)["ANTHROPIC_API_KEY"] == "sk-two"

    def test_update_current_reapplies(self, two_profiles: Path, claude_settings: Path) -> None:
        """Updating the current profile rewrites the settings."""
        result = runner.invoke(
            app, ["profile", "update", "claude-code", "work", "-m", "claude-opus-4"]
        )

        assert result.exit_code == 0
        assert _claude_env(claude_settings)["ANTHROPIC_MODEL"] == "claude-opus-4"

    def test_list(self, two_profiles: Path) -> None:
        """list shows every profile."""
        result = runner.invoke(app, ["profile", "list", "claude-code"])

        assert result.exit_code == 0
        assert "Work" in result.output
        assert "Home" in result.output
        assert "sk-one" not in result.output

    def test_list_unreadable_file(self, home: Path) -> None:
        """A profiles file that is not UTF-8 is reported, not a traceback."""
        profiles = home / "config" / "agentctl" / "profiles.toml"
        profiles.parent.mkdir(parents=True)
        profiles.write_bytes(b"[claude-code]\ncurrent_profile_id = \"\xff\"\n")

        result = runner.invoke(app, ["profile", "list", "claude-code"])

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)


class TestProviders:
    """Tests for agentctl profile providers."""

    def test_lists_presets(self) -> None:
        """providers lists the built-in presets."""
        result = runner.invoke(app, ["profile", "providers"])

        assert result.exit_code == 0
        assert "glm" in result.output
