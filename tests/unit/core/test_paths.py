"""Unit tests for path management.

Tests for agentctl's XDG directories and the managed tools' file locations.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from agentctl.core.paths import (
    APP_NAME,
    ensure_backup_dir,
    get_backup_dir,
    get_claude_dir,
    get_claude_local_binary_path,
    get_claude_settings_path,
    get_claude_state_path,
    get_codex_auth_path,
    get_codex_config_path,
    get_codex_dir,
    get_config_dir,
    get_gemini_settings_path,
    get_profiles_path,
    get_state_dir,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self, tmp_path: Path) -> None:
        """get_config_dir falls back to ~/.config when XDG_CONFIG_HOME is unset."""
        with patch.dict(os.environ, {"HOME": str(tmp_path)}, clear=True):
            result = get_config_dir()

        assert result == tmp_path / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME

    def test_profiles_path_in_config_dir(self, tmp_path: Path) -> None:
        """Profiles live in profiles.toml inside the config directory."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_profiles_path() == tmp_path / APP_NAME / "profiles.toml"


class TestStateAndBackupDirs:
    """Tests for the state directory and per-tool backup directories."""

    def test_default_state_dir(self, tmp_path: Path) -> None:
        """get_state_dir falls back to ~/.local/state."""
        with patch.dict(os.environ, {"HOME": str(tmp_path)}, clear=True):
            result = get_state_dir()

        assert result == tmp_path / ".local" / "state" / APP_NAME

    def test_backup_dir_per_tool(self, tmp_path: Path) -> None:
        """Backups are grouped by tool name."""
        with patch.dict(os.environ, {"XDG_STATE_HOME": str(tmp_path)}):
            result = get_backup_dir("gemini")

        assert result == tmp_path / APP_NAME / "backups" / "gemini"

    def test_ensure_backup_dir_creates_directory(self, tmp_path: Path) -> None:
        """ensure_backup_dir creates missing parents."""
        with patch.dict(os.environ, {"XDG_STATE_HOME": str(tmp_path)}):
            result = ensure_backup_dir("codex")

        assert result.is_dir()

    def test_ensure_backup_dir_permission_error(self, tmp_path: Path) -> None:
        """A permission error becomes a RuntimeError naming the directory."""
        with (
            patch.dict(os.environ, {"XDG_STATE_HOME": str(tmp_path)}),
            patch.object(Path, "mkdir", side_effect=PermissionError("denied")),
            pytest.raises(RuntimeError, match="Permission denied"),
        ):
            ensure_backup_dir("gemini")


class TestToolPaths:
    """Tests for the managed tools' file locations."""

    def test_claude_defaults(self, tmp_path: Path) -> None:
        """Claude Code files live under ~/.claude plus ~/.claude.json."""
        with patch.dict(os.environ, {"HOME": str(tmp_path)}, clear=True):
            assert get_claude_dir() == tmp_path / ".claude"
            assert get_claude_settings_path() == tmp_path / ".claude" / "settings.json"
            assert get_claude_state_path() == tmp_path / ".claude.json"
            assert get_claude_local_binary_path() == tmp_path / ".claude" / "local" / "claude"

    def test_claude_config_dir_override(self, tmp_path: Path) -> None:
        """CLAUDE_CONFIG_DIR relocates the settings directory."""
        custom = tmp_path / "claude-config"
        with patch.dict(os.environ, {"CLAUDE_CONFIG_DIR": str(custom)}):
            assert get_claude_settings_path() == custom / "settings.json"

    def test_codex_home_override(self, tmp_path: Path) -> None:
        """CODEX_HOME relocates both Codex files."""
        with patch.dict(os.environ, {"CODEX_HOME": str(tmp_path)}):
            assert get_codex_dir() == tmp_path
            assert get_codex_config_path() == tmp_path / "config.toml"
            assert get_codex_auth_path() == tmp_path / "auth.json"

    def test_gemini_settings(self, tmp_path: Path) -> None:
        """Gemini settings live in ~/.gemini/settings.json."""
        with patch.dict(os.environ, {"HOME": str(tmp_path)}, clear=True):
            assert get_gemini_settings_path() == tmp_path / ".gemini" / "settings.json"
