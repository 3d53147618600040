"""Field-level merge rules for the managed settings documents.

Every top-level field of a settings document has an explicit kind that
decides how a partial update is merged into it. Fields missing from a
schema are treated as scalars.
"""

from dataclasses import dataclass, field
from enum import Enum


class FieldKind(str, Enum):
    """How a field merges.

    Attributes:
        SCALAR: Value from the partial replaces the current value whole.
            Lists are scalars.
        SECTION: Nested object merged key by key, recursively, following
            the child rules.
        REGISTRY: Map of named entries merged entry by entry; each entry
            is replaced whole.
    """

    SCALAR = "scalar"
    SECTION = "section"
    REGISTRY = "registry"


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Merge rule for one field.

    Attributes:
        kind: How the field merges.
        children: Rules for the keys of a SECTION field.
    """

    kind: FieldKind = FieldKind.SCALAR
    children: dict[str, "FieldRule"] = field(default_factory=lambda: {})

    def child(self, key: str) -> "FieldRule":
        """Return the rule for a key inside a SECTION."""
        return self.children.get(key, SCALAR)


Schema = dict[str, FieldRule]

SCALAR = FieldRule()
REGISTRY = FieldRule(FieldKind.REGISTRY)


def section(**children: FieldRule) -> FieldRule:
    """Build a SECTION rule with optional child rules."""
    return FieldRule(FieldKind.SECTION, dict(children))


# ~/.claude/settings.json
CLAUDE_SETTINGS_SCHEMA: Schema = {
    "env": section(),
    "permissions": section(),
    "hooks": REGISTRY,
    "statusLine": section(),
}

# ~/.claude.json
CLAUDE_STATE_SCHEMA: Schema = {
    "mcpServers": REGISTRY,
    "projects": REGISTRY,
}

# ~/.codex/config.toml
CODEX_CONFIG_SCHEMA: Schema = {
    "model_providers": REGISTRY,
    "mcp_servers": REGISTRY,
    "profiles": REGISTRY,
    "features": section(),
    "tools": section(),
}

# ~/.codex/auth.json
CODEX_AUTH_SCHEMA: Schema = {
    "tokens": section(),
}

# ~/.gemini/settings.json
GEMINI_SETTINGS_SCHEMA: Schema = {
    "authentication": section(),
    "model": section(preferences=section()),
    "tools": section(googleSearch=section()),
    "mcpServers": REGISTRY,
    "customCommands": REGISTRY,
    "ui": section(keyboardShortcuts=section()),
    "customProvider": section(),
    "security": section(auth=section(), onboarding=section()),
    "telemetry": section(),
}
