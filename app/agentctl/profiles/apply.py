"""Materialize a profile into a tool's live settings.

Applying a profile writes its auth, endpoint and model fields into the
tool's settings documents through the merge engine and exports the
matching environment variables into ConfigContext.environ. Fields the
profile does not carry are removed from the auth sections, so switching
profiles never leaves the previous profile's key or endpoint behind.
Applying the same profile twice yields the same documents.
"""

import logging
import os
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any

from agentctl.models.profile import AuthType, Profile
from agentctl.models.tool import TargetTool
from agentctl.profiles.presets import wire_api_for
from agentctl.settings.defaults import GEMINI_DEFAULT_MODEL, GEMINI_FAST_MODEL
from agentctl.settings.store import DocumentKind, get_document

logger = logging.getLogger(__name__)

CCR_PROXY_URL = "http://127.0.0.1:3456"
CCR_PROXY_KEY = "sk-ccr-proxy"

OPENAI_KEY_VAR = "OPENAI_API_KEY"


@dataclass
class ConfigContext:
    """Where applied auth variables are exported.

    Attributes:
        environ: Environment mapping written by apply. Defaults to the
            process environment.
        exported: Variables set (str) or removed (None) by the last apply.
    """

    environ: MutableMapping[str, str] = field(default_factory=lambda: os.environ)
    exported: dict[str, str | None] = field(default_factory=dict)

    def export(self, variables: dict[str, str | None]) -> None:
        """Set or remove environment variables."""
        for key, value in variables.items():
            if value is None:
                self.environ.pop(key, None)
            else:
                self.environ[key] = value
        self.exported = dict(variables)


def _claude_env(profile: Profile) -> dict[str, str | None]:
    api_key = profile.api_key or None
    base_url = profile.base_url or None

    if profile.auth_type == AuthType.CCR_PROXY:
        env: dict[str, str | None] = {
            "ANTHROPIC_API_KEY": api_key or CCR_PROXY_KEY,
            "ANTHROPIC_AUTH_TOKEN": None,
            "ANTHROPIC_BASE_URL": base_url or CCR_PROXY_URL,
        }
    elif profile.auth_type == AuthType.AUTH_TOKEN:
        env = {
            "ANTHROPIC_API_KEY": None,
            "ANTHROPIC_AUTH_TOKEN": api_key,
            "ANTHROPIC_BASE_URL": base_url,
        }
    else:
        env = {
            "ANTHROPIC_API_KEY": api_key,
            "ANTHROPIC_AUTH_TOKEN": None,
            "ANTHROPIC_BASE_URL": base_url,
        }

    env["ANTHROPIC_MODEL"] = profile.primary_model or None
    env["ANTHROPIC_DEFAULT_HAIKU_MODEL"] = profile.fast_model or None
    return env


def _apply_claude(profile: Profile, context: ConfigContext) -> dict[str, Any]:
    env = _claude_env(profile)
    document = get_document(TargetTool.CLAUDE_CODE, DocumentKind.SETTINGS)
    result = document.update({"env": env})
    context.export(env)
    return result


def _apply_codex(profile: Profile, context: ConfigContext) -> dict[str, Any]:
    api_key = profile.api_key or None
    partial: dict[str, Any] = {"model": profile.primary_model or None}

    if profile.base_url:
        provider_id = profile.id or "custom"
        partial["model_provider"] = provider_id
        partial["model_providers"] = {
            provider_id: {
                "name": profile.name,
                "base_url": profile.base_url,
                "wire_api": wire_api_for(profile.base_url),
                "env_key": OPENAI_KEY_VAR,
                "requires_openai_auth": True,
            }
        }
    else:
        partial["model_provider"] = None

    result = get_document(TargetTool.CODEX, DocumentKind.CONFIG).update(partial)
    get_document(TargetTool.CODEX, DocumentKind.AUTH).update({OPENAI_KEY_VAR: api_key})
    context.export({OPENAI_KEY_VAR: api_key})
    return result


def _apply_gemini(profile: Profile, context: ConfigContext) -> dict[str, Any]:
    api_key = profile.api_key or None
    partial: dict[str, Any] = {
        "authentication": {
            "type": "api_key" if api_key else "oauth",
            "apiKey": api_key,
            "vertexAiProject": None,
        },
        "security": {
            "auth": {"selectedType": "api-key" if api_key else None, "apiKey": api_key},
        },
    }
    if api_key:
        partial["security"]["onboarding"] = {"completed": True}

    if profile.base_url:
        partial["mode"] = "custom"
        partial["customProvider"] = {
            "enabled": True,
            "id": profile.id,
            "name": profile.name,
            "baseUrl": profile.base_url,
            "apiKey": api_key,
            "model": profile.primary_model or None,
            "wireProtocol": "openai",
        }
    else:
        partial["mode"] = "official"
        partial["customProvider"] = None

    # Unset models reset to the defaults
    partial["model"] = {
        "default": profile.primary_model or GEMINI_DEFAULT_MODEL,
        "fast": profile.fast_model or GEMINI_FAST_MODEL,
    }

    result = get_document(TargetTool.GEMINI, DocumentKind.SETTINGS).update(partial)
    context.export(
        {
            "GEMINI_API_KEY": api_key,
            "GOOGLE_GEMINI_BASE_URL": profile.base_url or None,
        }
    )
    return result


_APPLIERS = {
    TargetTool.CLAUDE_CODE: _apply_claude,
    TargetTool.CODEX: _apply_codex,
    TargetTool.GEMINI: _apply_gemini,
}


def apply_profile_settings(
    tool: TargetTool,
    profile: Profile,
    context: ConfigContext | None = None,
) -> dict[str, Any]:
    """Write a profile's settings into a tool's configuration.

    Args:
        tool: Tool to configure.
        profile: Profile to materialize.
        context: Receives the exported environment variables. Defaults to
            one bound to the process environment.

    Returns:
        The tool's main settings document as written.

    Raises:
        ConfigIOError: If a settings file cannot be written.
    """
    context = context or ConfigContext()
    logger.info("Applying profile %s to %s", profile.id or profile.name, tool.value)
    return _APPLIERS[tool](profile, context)
