"""Settings documents of the managed tools and their merge rules."""

from agentctl.settings.merge import merge_settings
from agentctl.settings.schema import FieldKind, FieldRule
from agentctl.settings.store import (
    DocumentKind,
    SettingsDocument,
    get_document,
    get_record_document,
)

__all__ = [
    "DocumentKind",
    "FieldKind",
    "FieldRule",
    "SettingsDocument",
    "get_document",
    "get_record_document",
    "merge_settings",
]
