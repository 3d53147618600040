"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture
def home(tmp_path: Path) -> Iterator[Path]:
    """Run with HOME and the XDG directories inside tmp_path.

    The rest of the environment is cleared so CLAUDE_CONFIG_DIR,
    CODEX_HOME and similar overrides from the host do not leak in.
    """
    env = {
        "HOME": str(tmp_path),
        "XDG_CONFIG_HOME": str(tmp_path / "config"),
        "XDG_STATE_HOME": str(tmp_path / "state"),
    }
    with patch.dict(os.environ, env, clear=True):
        yield tmp_path


@pytest.fixture
def claude_settings(home: Path) -> Path:
    """Path of the Claude Code settings file under the fake HOME."""
    return home / ".claude" / "settings.json"
