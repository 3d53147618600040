"""Schema-driven deep merge of settings documents.

merge_settings() applies a partial document to a current document:

- Scalar fields in the partial overwrite the current value.
- SECTION fields merge key by key, recursively, using child rules.
- REGISTRY fields merge entry by entry; each entry is replaced whole.
- Fields absent from the partial survive unchanged.
- A None value removes the key (at any level, including registry entries).

Inputs are never mutated; the result shares no mutable state with them.
"""

import copy
from collections.abc import Callable, Mapping
from typing import Any

from agentctl.settings.schema import SCALAR, FieldKind, FieldRule, Schema


def _merge_section(
    current: Mapping[str, Any],
    partial: Mapping[str, Any],
    rule_for: Callable[[str], FieldRule],
) -> dict[str, Any]:
    merged = copy.deepcopy(dict(current))

    for key, value in partial.items():
        if value is None:
            merged.pop(key, None)
            continue

        rule = rule_for(key)
        existing = merged.get(key)

        if rule.kind == FieldKind.SECTION and isinstance(value, Mapping):
            base = existing if isinstance(existing, Mapping) else {}
            merged[key] = _merge_section(base, value, rule.child)
        elif rule.kind == FieldKind.REGISTRY and isinstance(value, Mapping):
            base = existing if isinstance(existing, Mapping) else {}
            merged[key] = _merge_registry(base, value)
        else:
            merged[key] = copy.deepcopy(value)

    return merged


def _merge_registry(current: Mapping[str, Any], partial: Mapping[str, Any]) -> dict[str, Any]:
    entries = copy.deepcopy(dict(current))
    for name, entry in partial.items():
        if entry is None:
            entries.pop(name, None)
        else:
            entries[name] = copy.deepcopy(entry)
    return entries


def merge_settings(
    current: Mapping[str, Any],
    partial: Mapping[str, Any],
    schema: Schema | None = None,
) -> dict[str, Any]:
    """Merge a partial update into a settings document.

    Args:
        current: Existing document.
        partial: Fields to change. None values delete keys.
        schema: Field rules for the document. Unknown fields are scalars.

    Returns:
        New merged document.

    Example:
        >>> merge_settings(
        ...     {"env": {"A": "1"}, "model": "x"},
        ...     {"env": {"B": "2"}},
        ...     {"env": section()},
        ... )
        {'env': {'A': '1', 'B': '2'}, 'model': 'x'}
    """
    rules = schema or {}
    return _merge_section(current, partial, lambda key: rules.get(key, SCALAR))
