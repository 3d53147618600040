"""Baseline documents used when a tool has no settings file yet."""

from typing import Any

GEMINI_DEFAULT_MODEL = "gemini-2.5-pro"
GEMINI_FAST_MODEL = "gemini-2.5-flash"


def default_claude_settings() -> dict[str, Any]:
    return {
        "$schema": "https://json.schemastore.org/claude-code-settings.json",
        "env": {},
        "permissions": {"allow": [], "deny": []},
    }


def default_claude_state() -> dict[str, Any]:
    return {"mcpServers": {}}


def default_codex_config() -> dict[str, Any]:
    return {
        "model_providers": {},
        "mcp_servers": {},
    }


def default_codex_auth() -> dict[str, Any]:
    return {}


def default_gemini_settings(
    auth_type: str = "oauth",
    api_key: str | None = None,
    vertex_ai_project: str | None = None,
) -> dict[str, Any]:
    """Build a fully populated Gemini CLI settings document.

    Args:
        auth_type: One of ``oauth``, ``api_key`` or ``vertex_ai``.
        api_key: Key stored when auth_type is ``api_key``.
        vertex_ai_project: Project stored when auth_type is ``vertex_ai``.

    Returns:
        New settings dictionary.
    """
    authentication: dict[str, Any] = {"type": auth_type}
    if auth_type == "api_key" and api_key:
        authentication["apiKey"] = api_key
    if auth_type == "vertex_ai" and vertex_ai_project:
        authentication["vertexAiProject"] = vertex_ai_project

    settings: dict[str, Any] = {
        "version": "1.0.0",
        "mode": "official",
        "authentication": authentication,
        "model": {
            "default": GEMINI_DEFAULT_MODEL,
            "fast": GEMINI_FAST_MODEL,
            "preferences": {
                "temperature": 0.7,
                "topP": 0.95,
                "topK": 40,
                "maxOutputTokens": 8192,
            },
        },
        "tools": {
            "enabled": ["fileSystem", "shell", "webFetch", "googleSearch"],
            "googleSearch": {"grounding": True},
        },
        "mcpServers": {},
        "customCommands": {},
        "ui": {"theme": "auto", "language": "en"},
        "telemetry": {"enabled": False},
    }

    # API key mode skips the OAuth onboarding flow
    if auth_type == "api_key" and api_key:
        settings["security"] = {
            "auth": {"selectedType": "api-key", "apiKey": api_key},
            "onboarding": {"completed": True},
        }

    return settings
