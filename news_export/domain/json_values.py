"""
JSON values and template token substitution.

Templates are plain JSON data: strings, numbers, booleans, null, lists and
string-keyed maps. Placeholders are written as ``#identifier#`` anywhere in a
string value.

Substitution rules:
- a string that is exactly one token becomes the typed value
- a token inside a longer string is replaced textually
- a map entry or list item whose token resolves to None is dropped
- inserted values are never scanned for tokens again
- every token in the template must have a value
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any, TypeAlias

from news_export.core.errors import InvalidSpecError, UnresolvedTokenError

JsonValue: TypeAlias = (
    str | int | float | bool | None | list["JsonValue"] | dict[str, "JsonValue"]
)

TOKEN_PATTERN = re.compile(r"#([A-Za-z0-9_]+)#")

_DROP = object()


def normalize_token(key: str) -> str:
    """Accept both ``text`` and ``#text#`` as a token key."""
    if len(key) > 2 and key.startswith("#") and key.endswith("#"):
        return key[1:-1]
    return key


def validate_template(value: Any, path: str = "$") -> None:
    """
    Check that a template is pure JSON data.

    Raises:
        InvalidSpecError: On callables, objects, tuples, sets or non-string keys.
    """
    if value is None or isinstance(value, (str, bool, int, float)):
        return
    if isinstance(value, list):
        for i, item in enumerate(value):
            validate_template(item, f"{path}[{i}]")
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise InvalidSpecError(f"non-string key {key!r} at {path}")
            validate_template(item, f"{path}.{key}")
        return
    raise InvalidSpecError(f"unsupported value of type {type(value).__name__} at {path}")


def find_tokens(template: JsonValue) -> set[str]:
    """Collect every token identifier used in a template."""
    if isinstance(template, str):
        return set(TOKEN_PATTERN.findall(template))
    if isinstance(template, list):
        found: set[str] = set()
        for item in template:
            found |= find_tokens(item)
        return found
    if isinstance(template, dict):
        found = set()
        for item in template.values():
            found |= find_tokens(item)
        return found
    return set()


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _substitute(template: JsonValue, values: dict[str, Any]) -> Any:
    if isinstance(template, str):
        whole = TOKEN_PATTERN.fullmatch(template)
        if whole:
            value = values[whole.group(1)]
            return _DROP if value is None else value
        return TOKEN_PATTERN.sub(lambda m: _to_text(values[m.group(1)]), template)

    if isinstance(template, list):
        items = [_substitute(item, values) for item in template]
        return [item for item in items if item is not _DROP]

    if isinstance(template, dict):
        result: dict[str, Any] = {}
        for key, item in template.items():
            resolved = _substitute(item, values)
            if resolved is not _DROP:
                result[key] = resolved
        return result

    return template


def substitute(template: JsonValue, values: Mapping[str, Any]) -> JsonValue:
    """
    Resolve every token in ``template`` from ``values``.

    Args:
        template: JSON template (never modified).
        values: Token values keyed by identifier, with or without ``#``.

    Returns:
        A new JSON value with all tokens replaced.

    Raises:
        UnresolvedTokenError: If the template uses a token with no value.
    """
    normalized = {normalize_token(k): v for k, v in values.items()}
    missing = find_tokens(template) - normalized.keys()
    if missing:
        raise UnresolvedTokenError(list(missing))

    result = _substitute(template, normalized)
    return None if result is _DROP else result


def canonical_json(value: JsonValue) -> str:
    """Stable encoding used for deep-equality checks (keeps 1, 1.0 and true apart)."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
