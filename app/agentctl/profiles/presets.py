"""Third-party API provider presets.

A preset supplies the endpoint, auth type and default models of a known
provider for each tool, so a profile only needs a name and a key.
"""

from dataclasses import dataclass, field

from agentctl.core.errors import NotFoundError
from agentctl.models.profile import AuthType, Profile
from agentctl.models.tool import TargetTool


@dataclass(frozen=True, slots=True)
class ToolEndpoint:
    """Provider settings for one tool.

    Attributes:
        base_url: API base URL.
        auth_type: How the key is sent (Claude Code only distinguishes).
        primary_model: Default model, if the provider needs one.
        fast_model: Default fast model.
        wire_api: Codex wire protocol (``responses`` or ``chat``).
    """

    base_url: str
    auth_type: AuthType = AuthType.API_KEY
    primary_model: str | None = None
    fast_model: str | None = None
    wire_api: str = "responses"


@dataclass(frozen=True, slots=True)
class ProviderPreset:
    """A known API provider.

    Attributes:
        id: Short identifier used on the command line.
        name: Display name.
        description: One-line description.
        endpoints: Settings per supported tool.
    """

    id: str
    name: str
    description: str
    endpoints: dict[TargetTool, ToolEndpoint] = field(default_factory=lambda: {})

    def supports(self, tool: TargetTool) -> bool:
        """Check if the provider serves a tool."""
        return tool in self.endpoints


PROVIDER_PRESETS: tuple[ProviderPreset, ...] = (
    ProviderPreset(
        id="302ai",
        name="302.AI",
        description="302.AI API service",
        endpoints={
            TargetTool.CLAUDE_CODE: ToolEndpoint("https://api.302.ai/cc", AuthType.API_KEY),
            TargetTool.CODEX: ToolEndpoint("https://api.302.ai/v1", wire_api="responses"),
            TargetTool.GEMINI: ToolEndpoint(
                "https://api.302.ai/v1", primary_model="gemini-2.0-flash-exp"
            ),
        },
    ),
    ProviderPreset(
        id="packycode",
        name="PackyCode",
        description="PackyCode API service",
        endpoints={
            TargetTool.CLAUDE_CODE: ToolEndpoint(
                "https://www.packyapi.com", AuthType.AUTH_TOKEN
            ),
            TargetTool.CODEX: ToolEndpoint("https://www.packyapi.com/v1", wire_api="responses"),
            TargetTool.GEMINI: ToolEndpoint(
                "https://www.packyapi.com/v1", primary_model="gemini-2.0-flash-exp"
            ),
        },
    ),
    ProviderPreset(
        id="glm",
        name="GLM",
        description="Zhipu AI GLM models",
        endpoints={
            TargetTool.CLAUDE_CODE: ToolEndpoint(
                "https://open.bigmodel.cn/api/anthropic", AuthType.AUTH_TOKEN
            ),
            TargetTool.CODEX: ToolEndpoint(
                "https://open.bigmodel.cn/api/coding/paas/v4",
                primary_model="GLM-4.6",
                wire_api="chat",
            ),
            TargetTool.GEMINI: ToolEndpoint(
                "https://open.bigmodel.cn/api/paas/v4", primary_model="glm-4-flash"
            ),
        },
    ),
    ProviderPreset(
        id="minimax",
        name="MiniMax",
        description="MiniMax API service",
        endpoints={
            TargetTool.CLAUDE_CODE: ToolEndpoint(
                "https://api.minimaxi.com/anthropic",
                AuthType.AUTH_TOKEN,
                primary_model="MiniMax-M2",
                fast_model="MiniMax-M2",
            ),
            TargetTool.CODEX: ToolEndpoint(
                "https://api.minimaxi.com/v1", primary_model="MiniMax-M2", wire_api="chat"
            ),
            TargetTool.GEMINI: ToolEndpoint(
                "https://api.minimaxi.com/v1", primary_model="MiniMax-M2"
            ),
        },
    ),
    ProviderPreset(
        id="kimi",
        name="Kimi",
        description="Moonshot AI Kimi models",
        endpoints={
            TargetTool.CLAUDE_CODE: ToolEndpoint(
                "https://api.kimi.com/coding/", AuthType.AUTH_TOKEN
            ),
            TargetTool.CODEX: ToolEndpoint(
                "https://api.kimi.com/coding/v1", primary_model="kimi-for-coding", wire_api="chat"
            ),
            TargetTool.GEMINI: ToolEndpoint(
                "https://api.kimi.com/coding/v1", primary_model="kimi-for-coding"
            ),
        },
    ),
)


def list_presets(tool: TargetTool | None = None) -> list[ProviderPreset]:
    """Return the presets, optionally only those serving a tool."""
    return [p for p in PROVIDER_PRESETS if tool is None or p.supports(tool)]


def get_preset(preset_id: str) -> ProviderPreset:
    """Look up a preset by id.

    Raises:
        NotFoundError: If no preset has that id.
    """
    for preset in PROVIDER_PRESETS:
        if preset.id == preset_id:
            return preset
    valid = ", ".join(p.id for p in PROVIDER_PRESETS)
    raise NotFoundError(f"Unknown provider '{preset_id}' (valid: {valid})")


def profile_from_preset(
    tool: TargetTool,
    preset_id: str,
    api_key: str,
    name: str | None = None,
) -> Profile:
    """Build a profile pre-filled from a provider preset.

    Args:
        tool: Tool the profile is for.
        preset_id: Provider preset id.
        api_key: Key for the provider.
        name: Profile name. Defaults to the provider's display name.

    Raises:
        NotFoundError: If the preset is unknown or does not serve the tool.
    """
    preset = get_preset(preset_id)
    endpoint = preset.endpoints.get(tool)
    if endpoint is None:
        raise NotFoundError(f"{preset.name} has no {tool.value} endpoint")

    return Profile(
        name=name or preset.name,
        auth_type=endpoint.auth_type,
        api_key=api_key,
        base_url=endpoint.base_url,
        primary_model=endpoint.primary_model,
        fast_model=endpoint.fast_model,
    )


def wire_api_for(base_url: str | None) -> str:
    """Return the Codex wire protocol of a base URL.

    Known preset endpoints use their declared protocol; anything else uses
    the ``responses`` API.
    """
    if base_url:
        normalized = base_url.rstrip("/")
        for preset in PROVIDER_PRESETS:
            endpoint = preset.endpoints.get(TargetTool.CODEX)
            if endpoint and endpoint.base_url.rstrip("/") == normalized:
                return endpoint.wire_api
    return "responses"
