"""Persistent profile collections.

Profiles are stored in ~/.config/agentctl/profiles.toml with one table
per tool:

    [claude-code]
    current_profile_id = "work"

    [claude-code.profiles.work]
    name = "Work"
    auth_type = "api_key"
    api_key = "sk-..."

Profile ids are the table keys; they are derived from the name and never
stored inside the record. Every mutation loads the file, validates,
changes the collection and writes it back atomically.
"""

import hashlib
import logging
import os
import re
import tomllib
from dataclasses import dataclass
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from agentctl.core.errors import ConfigIOError, ConfigValidationError, ProfileNotFoundError
from agentctl.core.paths import get_profiles_path
from agentctl.models.profile import Profile, ProfileCollection
from agentctl.models.tool import TargetTool

logger = logging.getLogger(__name__)

_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")

# Fields callers may change through update_profile
_UPDATABLE_FIELDS = frozenset(
    {"name", "auth_type", "api_key", "base_url", "primary_model", "fast_model"}
)


def generate_profile_id(name: str) -> str:
    """Derive a profile id from its name.

    The id is the lowercased name with every run of characters outside
    ``[a-z0-9]`` collapsed to a single dash. Names without any such
    characters (e.g. only CJK) get ``profile-`` plus a short hash.

    Example:
        >>> generate_profile_id("My Work Key")
        'my-work-key'
    """
    slug = _SLUG_SEPARATORS.sub("-", name.strip().lower()).strip("-")
    if slug:
        return slug
    digest = hashlib.sha1(name.encode("utf-8")).hexdigest()[:8]
    return f"profile-{digest}"


@dataclass(frozen=True, slots=True)
class DeleteResult:
    """Outcome of deleting profiles.

    Attributes:
        deleted: Ids that were removed.
        current_profile_id: Current profile after deletion, empty when the
            collection is now empty.
        current_changed: Whether the current profile was reassigned.
    """

    deleted: tuple[str, ...]
    current_profile_id: str
    current_changed: bool


class ProfileStore:
    """Profile collections for all tools, backed by one TOML file.

    Attributes:
        path: Location of the profile file.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize the store.

        Args:
            path: Profile file. Defaults to the XDG config location.
        """
        self.path = path or get_profiles_path()

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _load_all(self) -> dict[str, ProfileCollection]:
        """Load every tool's collection.

        Raises:
            ConfigIOError: If the file exists but cannot be read or parsed.
        """
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "rb") as f:
                data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ConfigIOError(f"Invalid TOML syntax in {self.path}: {e}") from e
        except OSError as e:
            raise ConfigIOError(f"Failed to read profiles: {e}") from e

        collections: dict[str, ProfileCollection] = {}
        for tool_key, table in data.items():
            try:
                collections[tool_key] = _collection_from_dict(table)
            except (AttributeError, TypeError, ValidationError) as e:
                raise ConfigIOError(f"Invalid profiles for {tool_key}: {e}") from e
        return collections

    def _save_all(self, collections: dict[str, ProfileCollection]) -> None:
        """Write every tool's collection atomically.

        Raises:
            ConfigIOError: If the file cannot be written.
        """
        data = {key: _collection_to_dict(c) for key, c in collections.items()}

        tmp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="wb",
                dir=self.path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                tomli_w.dump(data, f)
            os.replace(str(tmp_path), str(self.path))
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise ConfigIOError(f"Failed to write profiles: {e}") from e

    def get_collection(self, tool: TargetTool) -> ProfileCollection:
        """Return a copy of one tool's collection."""
        collection = self._load_all().get(tool.value)
        if collection is None:
            return ProfileCollection()
        return collection.model_copy(deep=True)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_profiles(self, tool: TargetTool) -> list[Profile]:
        """Return a tool's profiles in insertion order."""
        return list(self.get_collection(tool).profiles.values())

    def get_profile(self, tool: TargetTool, profile_id: str) -> Profile:
        """Return one profile.

        Raises:
            ProfileNotFoundError: If the id is unknown.
        """
        collection = self.get_collection(tool)
        if profile_id not in collection.profiles:
            raise ProfileNotFoundError(f"Profile '{profile_id}' not found for {tool.value}")
        return collection.profiles[profile_id]

    def get_profile_by_name(self, tool: TargetTool, name: str) -> Profile | None:
        """Return the profile with an exact name, if any."""
        for profile in self.list_profiles(tool):
            if profile.name == name:
                return profile
        return None

    def get_current_profile(self, tool: TargetTool) -> Profile | None:
        """Return the current profile, or None for an empty collection."""
        return self.get_collection(tool).current

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_profile(self, tool: TargetTool, profile: Profile) -> Profile:
        """Add a profile to a tool's collection.

        The id is derived from the name. The current profile is left alone,
        except that the first profile of an empty collection becomes
        current.

        Args:
            tool: Tool owning the profile.
            profile: Profile to add; its ``id`` is ignored.

        Returns:
            The stored profile, with its id.

        Raises:
            ConfigValidationError: If the name is empty or taken, the id
                collides, or a required key is missing.
            ConfigIOError: If the profile file cannot be read or written.
        """
        collections = self._load_all()
        collection = collections.get(tool.value, ProfileCollection())

        profile_id, stored = _validated(profile, collection)
        collection.profiles[profile_id] = stored
        if not collection.current_profile_id:
            collection.current_profile_id = profile_id

        collections[tool.value] = collection
        self._save_all(collections)
        logger.info("Added profile %s to %s", profile_id, tool.value)
        return stored.model_copy()

    def update_profile(self, tool: TargetTool, profile_id: str, **changes: Any) -> Profile:
        """Change fields of an existing profile.

        Renaming re-derives the id; the profile keeps its position and, if
        it was current, stays current under the new id.

        Args:
            tool: Tool owning the profile.
            profile_id: Profile to change.
            **changes: New field values.

        Returns:
            The updated profile.

        Raises:
            ProfileNotFoundError: If the id is unknown.
            ConfigValidationError: If a field is not updatable or the result
                fails validation.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ConfigValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        collections = self._load_all()
        collection = collections.get(tool.value, ProfileCollection())
        existing = collection.profiles.get(profile_id)
        if existing is None:
            raise ProfileNotFoundError(f"Profile '{profile_id}' not found for {tool.value}")

        try:
            candidate = Profile.model_validate({**existing.model_dump(), **changes})
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid profile: {e}") from e

        others = ProfileCollection(
            current_profile_id=collection.current_profile_id,
            profiles={k: v for k, v in collection.profiles.items() if k != profile_id},
        )
        new_id, updated = _validated(candidate, others)

        collection.profiles = {
            (new_id if key == profile_id else key): (updated if key == profile_id else value)
            for key, value in collection.profiles.items()
        }
        if collection.current_profile_id == profile_id:
            collection.current_profile_id = new_id

        collections[tool.value] = collection
        self._save_all(collections)
        return updated.model_copy()

    def switch_profile(self, tool: TargetTool, profile_id: str) -> str:
        """Make a profile current.

        Only moves the pointer; apply the profile to the tool's settings
        afterwards to make it take effect.

        Returns:
            The new current profile id.

        Raises:
            ProfileNotFoundError: If the id is unknown. The pointer is left
                unchanged.
        """
        collections = self._load_all()
        collection = collections.get(tool.value, ProfileCollection())
        if profile_id not in collection.profiles:
            raise ProfileNotFoundError(f"Profile '{profile_id}' not found for {tool.value}")

        collection.current_profile_id = profile_id
        collections[tool.value] = collection
        self._save_all(collections)
        logger.info("Switched %s to profile %s", tool.value, profile_id)
        return profile_id

    def delete_profiles(self, tool: TargetTool, profile_ids: list[str]) -> DeleteResult:
        """Delete profiles.

        If the current profile is deleted, the first remaining profile in
        insertion order becomes current, or the pointer is cleared when
        nothing remains.

        Raises:
            ProfileNotFoundError: If any id is unknown. Nothing is deleted
                in that case.
        """
        collections = self._load_all()
        collection = collections.get(tool.value, ProfileCollection())

        missing = [pid for pid in profile_ids if pid not in collection.profiles]
        if missing:
            raise ProfileNotFoundError(
                f"Profile(s) not found for {tool.value}: {', '.join(missing)}"
            )

        doomed = set(profile_ids)
        collection.profiles = {k: v for k, v in collection.profiles.items() if k not in doomed}

        current_changed = collection.current_profile_id in doomed
        if current_changed:
            collection.current_profile_id = next(iter(collection.profiles), "")

        collections[tool.value] = collection
        self._save_all(collections)

        return DeleteResult(
            deleted=tuple(dict.fromkeys(profile_ids)),
            current_profile_id=collection.current_profile_id,
            current_changed=current_changed,
        )


def _validated(profile: Profile, collection: ProfileCollection) -> tuple[str, Profile]:
    """Check a profile against a collection and derive its id.

    Raises:
        ConfigValidationError: On empty or duplicate name, id collision, or
            missing key.
    """
    name = profile.name.strip()
    if not name:
        raise ConfigValidationError("Profile name is required")

    if any(existing.name == name for existing in collection.profiles.values()):
        raise ConfigValidationError(f"A profile named '{name}' already exists")

    profile_id = generate_profile_id(name)
    if profile_id in collection.profiles:
        raise ConfigValidationError(
            f"A profile named '{name}' already exists (id '{profile_id}' is taken)"
        )

    if profile.auth_type.requires_key and not (profile.api_key or "").strip():
        raise ConfigValidationError(
            f"Profile '{name}' uses {profile.auth_type.value} and needs an API key"
        )

    return profile_id, profile.model_copy(update={"id": profile_id, "name": name})


def _collection_from_dict(table: dict[str, Any]) -> ProfileCollection:
    profiles = {
        profile_id: Profile.model_validate({**record, "id": profile_id})
        for profile_id, record in table.get("profiles", {}).items()
    }
    return ProfileCollection(
        current_profile_id=table.get("current_profile_id", ""),
        profiles=profiles,
    )


def _collection_to_dict(collection: ProfileCollection) -> dict[str, Any]:
    return {
        "current_profile_id": collection.current_profile_id,
        "profiles": {
            profile_id: profile.model_dump(mode="json", exclude_none=True)
            for profile_id, profile in collection.profiles.items()
        },
    }
