"""Unit tests for persisted settings documents."""

import json
import tomllib
from pathlib import Path

import pytest
from agentctl.core.errors import ConfigIOError, NotFoundError
from agentctl.models.tool import TargetTool
from agentctl.settings.store import (
    DOCUMENT_SPECS,
    DocumentKind,
    SettingsDocument,
    get_document,
    get_record_document,
)


class TestGetDocument:
    """Tests for document lookup."""

    def test_primary_documents(self, home: Path) -> None:
        """Each tool defaults to its main settings file."""
        assert get_document(TargetTool.CLAUDE_CODE).path == home / ".claude" / "settings.json"
        assert get_document(TargetTool.CODEX).path == home / ".codex" / "config.toml"
        assert get_document(TargetTool.GEMINI).path == home / ".gemini" / "settings.json"

    def test_explicit_kind(self, home: Path) -> None:
        """A document kind selects a secondary file."""
        state = get_document(TargetTool.CLAUDE_CODE, DocumentKind.STATE)
        auth = get_document(TargetTool.CODEX, DocumentKind.AUTH)

        assert state.path == home / ".claude.json"
        assert auth.path == home / ".codex" / "auth.json"

    def test_unknown_combination(self, home: Path) -> None:
        """Asking for a document a tool does not have raises NotFoundError."""
        with pytest.raises(NotFoundError, match="gemini has no auth document"):
            get_document(TargetTool.GEMINI, DocumentKind.AUTH)

    def test_record_documents(self, home: Path) -> None:
        """Claude records in ~/.claude.json, Gemini in settings, Codex nowhere."""
        claude = get_record_document(TargetTool.CLAUDE_CODE)
        gemini = get_record_document(TargetTool.GEMINI)

        assert claude is not None and claude.spec.kind == DocumentKind.STATE
        assert gemini is not None and gemini.spec.kind == DocumentKind.SETTINGS
        assert get_record_document(TargetTool.CODEX) is None


class TestReadWrite:
    """Tests for loading and saving documents."""

    def test_read_missing_returns_none(self, home: Path) -> None:
        """A missing file reads as None."""
        assert get_document(TargetTool.GEMINI).read() is None

    def test_read_corrupt_returns_none(self, home: Path) -> None:
        """Corrupt JSON reads as None instead of raising."""
        document = get_document(TargetTool.GEMINI)
        document.path.parent.mkdir(parents=True)
        document.path.write_text("{not json")

        assert document.read() is None

    def test_load_corrupt_raises(self, home: Path) -> None:
        """load() reports corrupt content."""
        document = get_document(TargetTool.CODEX)
        document.path.parent.mkdir(parents=True)
        document.path.write_text("model = ")

        with pytest.raises(ConfigIOError, match="Invalid toml"):
            document.load()

    def test_load_non_object_raises(self, home: Path) -> None:
        """A top-level array is rejected."""
        document = get_document(TargetTool.CLAUDE_CODE)
        document.path.parent.mkdir(parents=True)
        document.path.write_text("[1, 2]")

        with pytest.raises(ConfigIOError, match="Expected an object"):
            document.load()

    def test_write_json_creates_parents(self, home: Path) -> None:
        """write() creates the tool directory and writes indented JSON."""
        document = get_document(TargetTool.CLAUDE_CODE)

        document.write({"model": "opus"})

        assert json.loads(document.path.read_text()) == {"model": "opus"}
        assert document.path.read_text().endswith("\n")

    def test_write_toml(self, home: Path) -> None:
        """Codex config is written as TOML."""
        document = get_document(TargetTool.CODEX)

        document.write({"model": "gpt-5", "model_providers": {"glm": {"base_url": "u"}}})

        with open(document.path, "rb") as f:
            assert tomllib.load(f) == {
                "model": "gpt-5",
                "model_providers": {"glm": {"base_url": "u"}},
            }

    def test_write_leaves_no_temp_files(self, home: Path) -> None:
        """The atomic write cleans up after itself."""
        document = get_document(TargetTool.GEMINI)

        document.write({"a": 1})

        assert [p.name for p in document.path.parent.iterdir()] == ["settings.json"]

    def test_write_unserializable_raises(self, home: Path) -> None:
        """An unserializable value raises ConfigIOError and keeps the old file."""
        document = get_document(TargetTool.GEMINI)
        document.write({"a": 1})

        with pytest.raises(ConfigIOError):
            document.write({"a": object()})

        assert json.loads(document.path.read_text()) == {"a": 1}
        assert [p.name for p in document.path.parent.iterdir()] == ["settings.json"]

    def test_path_override(self, tmp_path: Path) -> None:
        """An explicit path takes precedence over the default location."""
        spec = DOCUMENT_SPECS[(TargetTool.CODEX, DocumentKind.AUTH)]
        document = SettingsDocument(spec, path=tmp_path / "auth.json")

        document.write({"OPENAI_API_KEY": "sk"})

        assert document.load() == {"OPENAI_API_KEY": "sk"}


class TestUpdate:
    """Tests for write-through partial updates."""

    def test_update_starts_from_default(self, home: Path) -> None:
        """Updating a missing file starts from the default document."""
        document = get_document(TargetTool.CLAUDE_CODE)

        written = document.update({"env": {"ANTHROPIC_MODEL": "opus"}})

        assert written["env"] == {"ANTHROPIC_MODEL": "opus"}
        assert written["permissions"] == {"allow": [], "deny": []}
        assert document.load() == written

    def test_update_preserves_unrelated_fields(self, home: Path) -> None:
        """Fields the update does not mention survive."""
        document = get_document(TargetTool.GEMINI)
        document.write({"theme": "dark", "mcpServers": {"fs": {"command": "npx"}}})

        document.update({"mcpServers": {"github": {"command": "docker"}}})

        assert document.load() == {
            "theme": "dark",
            "mcpServers": {"fs": {"command": "npx"}, "github": {"command": "docker"}},
        }

    def test_update_replaces_corrupt_file(self, home: Path) -> None:
        """A corrupt file is treated as missing."""
        document = get_document(TargetTool.CLAUDE_CODE, DocumentKind.STATE)
        document.path.write_text("{{{")

        document.update({"installMethod": "npm-global"})

        assert document.load() == {"mcpServers": {}, "installMethod": "npm-global"}


class TestBackupAndReset:
    """Tests for backup and reset."""

    def test_backup_missing_file(self, home: Path) -> None:
        """There is nothing to back up without a file."""
        with pytest.raises(NotFoundError):
            get_document(TargetTool.GEMINI).backup()

    def test_backup_copies_file(self, home: Path) -> None:
        """The backup lands in the tool's backup directory with a timestamp."""
        document = get_document(TargetTool.CLAUDE_CODE, DocumentKind.STATE)
        document.write({"installMethod": "native"})

        backup = document.backup()

        assert backup.parent == home / "state" / "agentctl" / "backups" / "claude-code"
        assert backup.name.startswith("claude.backup.")
        assert backup.suffix == ".json"
        assert json.loads(backup.read_text()) == {"installMethod": "native"}

    def test_reset_backs_up_then_writes_default(self, home: Path) -> None:
        """reset() keeps a backup and restores the default document."""
        document = get_document(TargetTool.CODEX)
        document.write({"model": "custom"})

        backup = document.reset()

        assert backup is not None and backup.exists()
        assert document.load() == {"model_providers": {}, "mcp_servers": {}}

    def test_reset_without_file(self, home: Path) -> None:
        """reset() on a missing file just writes the default."""
        document = get_document(TargetTool.GEMINI)

        assert document.reset() is None
        assert document.load()["mode"] == "official"
