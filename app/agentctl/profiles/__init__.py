"""API profiles: storage, provider presets and application to settings."""

from agentctl.profiles.apply import ConfigContext, apply_profile_settings
from agentctl.profiles.store import DeleteResult, ProfileStore, generate_profile_id

__all__ = [
    "ConfigContext",
    "DeleteResult",
    "ProfileStore",
    "apply_profile_settings",
    "generate_profile_id",
]
