"""Persisted settings documents of the managed tools.

Each (tool, document kind) pair maps to one file in the tool's own home
directory. Documents are read leniently (a missing or corrupt file reads
as None so callers fall back to defaults), written atomically, and
updated through the schema-driven merge so unrelated fields survive.
"""

import json
import logging
import os
import shutil
import tomllib
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w

from agentctl.core import paths
from agentctl.core.errors import ConfigIOError, NotFoundError
from agentctl.models.tool import TargetTool
from agentctl.settings import defaults, schema
from agentctl.settings.merge import merge_settings
from agentctl.settings.schema import Schema

logger = logging.getLogger(__name__)

BACKUP_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


class DocumentFormat(str, Enum):
    """Serialization format of a settings file."""

    JSON = "json"
    TOML = "toml"


class DocumentKind(str, Enum):
    """Role of a settings file within its tool.

    Attributes:
        SETTINGS: Main settings (auth, model, UI).
        STATE: Claude Code runtime state (MCP servers, install record).
        CONFIG: Codex configuration (providers, MCP servers).
        AUTH: Codex credentials.
    """

    SETTINGS = "settings"
    STATE = "state"
    CONFIG = "config"
    AUTH = "auth"


@dataclass(frozen=True, slots=True)
class DocumentSpec:
    """Static description of a settings file.

    Attributes:
        tool: Tool owning the file.
        kind: Role of the file.
        path_factory: Returns the file location (resolved lazily so
            HOME and tool overrides are honored at call time).
        format: Serialization format.
        schema: Merge rules.
        default_factory: Builds the baseline document.
    """

    tool: TargetTool
    kind: DocumentKind
    path_factory: Callable[[], Path]
    format: DocumentFormat
    schema: Schema
    default_factory: Callable[[], dict[str, Any]]


DOCUMENT_SPECS: dict[tuple[TargetTool, DocumentKind], DocumentSpec] = {
    (TargetTool.CLAUDE_CODE, DocumentKind.SETTINGS): DocumentSpec(
        tool=TargetTool.CLAUDE_CODE,
        kind=DocumentKind.SETTINGS,
        path_factory=paths.get_claude_settings_path,
        format=DocumentFormat.JSON,
        schema=schema.CLAUDE_SETTINGS_SCHEMA,
        default_factory=defaults.default_claude_settings,
    ),
    (TargetTool.CLAUDE_CODE, DocumentKind.STATE): DocumentSpec(
        tool=TargetTool.CLAUDE_CODE,
        kind=DocumentKind.STATE,
        path_factory=paths.get_claude_state_path,
        format=DocumentFormat.JSON,
        schema=schema.CLAUDE_STATE_SCHEMA,
        default_factory=defaults.default_claude_state,
    ),
    (TargetTool.CODEX, DocumentKind.CONFIG): DocumentSpec(
        tool=TargetTool.CODEX,
        kind=DocumentKind.CONFIG,
        path_factory=paths.get_codex_config_path,
        format=DocumentFormat.TOML,
        schema=schema.CODEX_CONFIG_SCHEMA,
        default_factory=defaults.default_codex_config,
    ),
    (TargetTool.CODEX, DocumentKind.AUTH): DocumentSpec(
        tool=TargetTool.CODEX,
        kind=DocumentKind.AUTH,
        path_factory=paths.get_codex_auth_path,
        format=DocumentFormat.JSON,
        schema=schema.CODEX_AUTH_SCHEMA,
        default_factory=defaults.default_codex_auth,
    ),
    (TargetTool.GEMINI, DocumentKind.SETTINGS): DocumentSpec(
        tool=TargetTool.GEMINI,
        kind=DocumentKind.SETTINGS,
        path_factory=paths.get_gemini_settings_path,
        format=DocumentFormat.JSON,
        schema=schema.GEMINI_SETTINGS_SCHEMA,
        default_factory=defaults.default_gemini_settings,
    ),
}

# Document holding the installMethod record; codex keeps none
RECORD_DOCUMENTS: dict[TargetTool, DocumentKind] = {
    TargetTool.CLAUDE_CODE: DocumentKind.STATE,
    TargetTool.GEMINI: DocumentKind.SETTINGS,
}

# Main document edited by `agentctl settings` for each tool
PRIMARY_DOCUMENTS: dict[TargetTool, DocumentKind] = {
    TargetTool.CLAUDE_CODE: DocumentKind.SETTINGS,
    TargetTool.CODEX: DocumentKind.CONFIG,
    TargetTool.GEMINI: DocumentKind.SETTINGS,
}


class SettingsDocument:
    """One persisted settings file.

    Attributes:
        spec: Static description of the file.
        path: Location of the file.
    """

    def __init__(self, spec: DocumentSpec, path: Path | None = None) -> None:
        """Initialize the document.

        Args:
            spec: Static description of the file.
            path: Override for the file location (tests).
        """
        self.spec = spec
        self.path = path or spec.path_factory()

    def __repr__(self) -> str:
        return f"SettingsDocument({self.spec.tool.value}/{self.spec.kind.value}, {self.path})"

    def exists(self) -> bool:
        """Check if the file exists."""
        return self.path.exists()

    def create_default(self) -> dict[str, Any]:
        """Return a new baseline document."""
        return self.spec.default_factory()

    def load(self) -> dict[str, Any]:
        """Load and parse the file.

        Returns:
            Parsed document.

        Raises:
            ConfigIOError: If the file is missing, unreadable, corrupt, or
                not a mapping at the top level.
        """
        try:
            if self.spec.format == DocumentFormat.TOML:
                with open(self.path, "rb") as f:
                    data = tomllib.load(f)
            else:
                with open(self.path, encoding="utf-8") as f:
                    data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigIOError(f"Settings file not found: {self.path}") from e
        except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
            raise ConfigIOError(f"Invalid {self.spec.format.value} in {self.path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigIOError(f"Failed to read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigIOError(f"Expected an object at the top of {self.path}")
        return data

    def read(self) -> dict[str, Any] | None:
        """Load the file, treating any failure as "no configuration yet".

        Returns:
            Parsed document, or None if missing or unreadable.
        """
        if not self.exists():
            return None
        try:
            return self.load()
        except ConfigIOError as e:
            logger.warning("Ignoring unreadable settings: %s", e)
            return None

    def write(self, data: dict[str, Any]) -> Path:
        """Write the document atomically.

        Args:
            data: Full document to write.

        Returns:
            Path of the written file.

        Raises:
            ConfigIOError: If the file cannot be written.
        """
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
                if self.spec.format == DocumentFormat.TOML:
                    tomli_w.dump(data, f)
                else:
                    f.write(json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8"))
                    f.write(b"\n")
            os.replace(str(tmp_path), str(self.path))
        except (OSError, TypeError, ValueError) as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise ConfigIOError(f"Failed to write {self.path}: {e}") from e

        logger.debug("Wrote %s", self.path)
        return self.path

    def update(self, partial: dict[str, Any]) -> dict[str, Any]:
        """Merge a partial document into the file and save it.

        Starts from the current file, or from the default document when
        the file is missing or unreadable.

        Args:
            partial: Fields to change. None values delete keys.

        Returns:
            The document as written.

        Raises:
            ConfigIOError: If the file cannot be written.
        """
        current = self.read()
        if current is None:
            current = self.create_default()
        merged = merge_settings(current, partial, self.spec.schema)
        self.write(merged)
        return merged

    def backup(self) -> Path:
        """Copy the file into the tool's backup directory.

        Returns:
            Path of the backup copy, named
            ``<stem>.backup.<YYYY-MM-DD_HH-MM-SS><suffix>``.

        Raises:
            NotFoundError: If there is no file to back up.
            ConfigIOError: If the copy fails.
        """
        if not self.exists():
            raise NotFoundError(f"No settings file to back up: {self.path}")

        timestamp = datetime.now().strftime(BACKUP_TIMESTAMP_FORMAT)
        name = f"{self.path.stem.lstrip('.')}.backup.{timestamp}{self.path.suffix}"

        try:
            backup_dir = paths.ensure_backup_dir(self.spec.tool.value)
            dest = backup_dir / name
            shutil.copy2(str(self.path), str(dest))
        except (OSError, RuntimeError) as e:
            raise ConfigIOError(f"Backup of {self.path} failed: {e}") from e

        logger.info("Backed up %s to %s", self.path, dest)
        return dest

    def reset(self) -> Path | None:
        """Replace the file with the default document.

        Backs the existing file up first.

        Returns:
            Path of the backup, or None if there was no file.
        """
        backup_path = self.backup() if self.exists() else None
        self.write(self.create_default())
        return backup_path


def get_document(tool: TargetTool, kind: DocumentKind | None = None) -> SettingsDocument:
    """Return a settings document of a tool.

    Args:
        tool: Tool owning the document.
        kind: Document role. Defaults to the tool's primary document.

    Returns:
        SettingsDocument bound to the current file location.

    Raises:
        NotFoundError: If the tool has no document of that kind.
    """
    kind = kind or PRIMARY_DOCUMENTS[tool]
    spec = DOCUMENT_SPECS.get((tool, kind))
    if spec is None:
        raise NotFoundError(f"{tool.value} has no {kind.value} document")
    return SettingsDocument(spec)


def get_record_document(tool: TargetTool) -> SettingsDocument | None:
    """Return the document holding a tool's install record, if any."""
    kind = RECORD_DOCUMENTS.get(tool)
    if kind is None:
        return None
    return get_document(tool, kind)
