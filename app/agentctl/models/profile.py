"""API profile models.

A profile is a named bundle of credentials, endpoint and model selection
for one tool. Each tool owns one ProfileCollection with a single current
profile.
"""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class AuthType(str, Enum):
    """How a profile authenticates against its endpoint.

    Attributes:
        API_KEY: Key sent as an API key header.
        AUTH_TOKEN: Key sent as a bearer token.
        CCR_PROXY: Local Claude Code Router proxy; no key required.
    """

    API_KEY = "api_key"
    AUTH_TOKEN = "auth_token"
    CCR_PROXY = "ccr_proxy"

    @property
    def requires_key(self) -> bool:
        """Check if profiles of this kind must carry a key."""
        return self in (AuthType.API_KEY, AuthType.AUTH_TOKEN)


class Profile(BaseModel):
    """Configuration profile for one tool.

    The id is derived from the name and is never written to disk; the
    store fills it in from the collection key when loading.
    """

    model_config = ConfigDict(extra="forbid")

    id: Annotated[
        str | None,
        Field(exclude=True, description="Derived slug of the name"),
    ] = None
    name: str
    auth_type: AuthType = AuthType.API_KEY
    api_key: str | None = None
    base_url: str | None = None
    primary_model: str | None = None
    fast_model: str | None = None


class ProfileCollection(BaseModel):
    """All profiles of one tool plus the current-profile pointer.

    Attributes:
        current_profile_id: Id of the materialized profile, empty when the
            collection is empty.
        profiles: Profiles keyed by id, in insertion order.
    """

    model_config = ConfigDict(extra="forbid")

    current_profile_id: str = ""
    profiles: dict[str, Profile] = Field(default_factory=dict)

    @property
    def current(self) -> Profile | None:
        """Return the current profile, if any."""
        return self.profiles.get(self.current_profile_id)
