"""File locations for agentctl and the managed tools.

agentctl keeps its own files in XDG directories:
- ~/.config/agentctl/ (profiles.toml, theme.toml)
- ~/.local/state/agentctl/backups/<tool>/ (settings backups)

The managed tools keep their files in their own home directories
(~/.claude, ~/.codex, ~/.gemini). CLAUDE_CONFIG_DIR and CODEX_HOME are
honored the same way the tools themselves honor them.
"""

import os
from pathlib import Path

APP_NAME = "agentctl"


def _xdg_app_dir(env_var: str, fallback: str) -> Path:
    # An empty variable counts as unset
    root = os.environ.get(env_var) or str(Path.home() / fallback)
    return Path(root) / APP_NAME


def get_config_dir() -> Path:
    """$XDG_CONFIG_HOME/agentctl, defaulting to ~/.config/agentctl."""
    return _xdg_app_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """$XDG_STATE_HOME/agentctl, defaulting to ~/.local/state/agentctl."""
    return _xdg_app_dir("XDG_STATE_HOME", ".local/state")


def get_profiles_path() -> Path:
    return get_config_dir() / "profiles.toml"


def get_theme_path() -> Path:
    return get_config_dir() / "theme.toml"


def get_backup_dir(tool_name: str) -> Path:
    """Directory holding the settings backups of one tool.

    Args:
        tool_name: Tool identifier (e.g., "claude-code").
    """
    return get_state_dir() / "backups" / tool_name


def ensure_backup_dir(tool_name: str) -> Path:
    """Create the backup directory of a tool.

    Returns:
        The directory, which now exists.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_backup_dir(tool_name)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        reason = "Permission denied" if isinstance(e, PermissionError) else str(e)
        raise RuntimeError(f"Cannot create backup directory {path}: {reason}") from e
    return path


# =============================================================================
# Managed tool paths
# =============================================================================


def get_claude_dir() -> Path:
    """Get the Claude Code configuration directory.

    Returns:
        Path to $CLAUDE_CONFIG_DIR or ~/.claude/.
    """
    override = os.environ.get("CLAUDE_CONFIG_DIR")
    if override:
        return Path(override)
    return Path.home() / ".claude"


def get_claude_settings_path() -> Path:
    """Get the Claude Code settings file (env, permissions, model).

    Returns:
        Path to ~/.claude/settings.json.
    """
    return get_claude_dir() / "settings.json"


def get_claude_state_path() -> Path:
    """Get the Claude Code state file (MCP servers, install method).

    Returns:
        Path to ~/.claude.json.
    """
    return Path.home() / ".claude.json"


def get_claude_local_binary_path() -> Path:
    """Get the path of a local (non-global) Claude Code installation.

    Returns:
        Path to ~/.claude/local/claude.
    """
    return get_claude_dir() / "local" / "claude"


def get_codex_dir() -> Path:
    """Get the Codex home directory.

    Returns:
        Path to $CODEX_HOME or ~/.codex/.
    """
    override = os.environ.get("CODEX_HOME")
    if override:
        return Path(override)
    return Path.home() / ".codex"


def get_codex_config_path() -> Path:
    """Get the Codex configuration file.

    Returns:
        Path to ~/.codex/config.toml.
    """
    return get_codex_dir() / "config.toml"


def get_codex_auth_path() -> Path:
    """Get the Codex credentials file.

    Returns:
        Path to ~/.codex/auth.json.
    """
    return get_codex_dir() / "auth.json"


def get_gemini_dir() -> Path:
    """Get the Gemini CLI configuration directory.

    Returns:
        Path to ~/.gemini/.
    """
    return Path.home() / ".gemini"


def get_gemini_settings_path() -> Path:
    """Get the Gemini CLI settings file.

    Returns:
        Path to ~/.gemini/settings.json.
    """
    return get_gemini_dir() / "settings.json"
