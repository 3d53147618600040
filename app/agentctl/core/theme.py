"""Console palette for agentctl.

The palette can be overridden per color in ~/.config/agentctl/theme.toml:

    [colors]
    installed = "#00ff00"
    recommended = "#ffaf00"
"""

import logging
import re
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from agentctl.core.paths import get_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Hex colors for each role in agentctl output."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    muted: str = "#8a9ba8"
    header: str = "#5fafd7"
    border: str = "#3a5f7a"

    success: str = "#2ec27e"
    warning: str = "#e5a50a"
    error: str = "#e01b24"
    info: str = "#33c7de"

    # Method picker and profile table markers
    recommended: str = "#a6e22e"
    current: str = "#5fafd7"

    @field_validator("*", mode="before")
    @classmethod
    def _check_hex(cls, value: object, info: Any) -> str:
        if not isinstance(value, str) or not _HEX_COLOR.fullmatch(value.strip()):
            raise ValueError(f"{info.field_name}: expected #RGB or #RRGGBB, got {value!r}")
        return value.strip()


# Rich style name -> (palette field, bold)
_STYLES: dict[str, tuple[str, bool]] = {
    "muted": ("muted", False),
    "header": ("header", True),
    "border": ("border", False),
    "success": ("success", False),
    "warning": ("warning", False),
    "error": ("error", True),
    "info": ("info", False),
    "recommended": ("recommended", True),
    "current": ("current", True),
}


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Non-string values are skipped. Returns None when the file is missing
    or unreadable.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return None
    return {str(k): v for k, v in colors.items() if isinstance(v, str)}


def load_theme() -> ThemeColors:
    """Return the default palette with the user's overrides applied.

    An override file that fails validation is ignored as a whole.
    """
    path = get_theme_path()
    overrides = _load_toml_colors(path)
    if not overrides:
        return ThemeColors()

    try:
        colors = ThemeColors(**overrides)
    except ValidationError as e:
        logger.warning("Invalid theme in %s, using defaults: %s", path, e)
        return ThemeColors()
    logger.debug("Theme overrides loaded from %s", path)
    return colors


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for a palette (loaded from disk when omitted)."""
    palette = colors if colors is not None else load_theme()
    styles = {}
    for style, (field, bold) in _STYLES.items():
        color = getattr(palette, field)
        styles[style] = f"bold {color}" if bold else color
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the process-wide Rich theme."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
