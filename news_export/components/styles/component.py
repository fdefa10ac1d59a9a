"""
Styles component - per-run style and layout tables.

Each resolved style or layout is stored once per category under a symbolic
name that components reference.

Invariants:
- I1: Deep-equal values in one category share one symbolic name
- I2: The first value registered under a name keeps it; later distinct
      values get ``-2``, ``-3``... suffixes
- I3: Categories are separate namespaces
- I4: The table only grows during a run
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from news_export.components.specs import SpecRegistry
from news_export.domain.json_values import JsonValue, canonical_json

logger = logging.getLogger(__name__)

# Category tag -> document key
CATEGORY_KEYS: dict[str, str] = {
    "textStyle": "componentTextStyles",
    "layout": "componentLayouts",
    "style": "componentStyles",
}

# Emitted even when empty
ALWAYS_EMITTED = ("textStyle", "layout")


class StyleTable:
    """
    Symbolic-name tables for one export run.

    Not shared between runs.
    """

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, JsonValue]] = {tag: {} for tag in CATEGORY_KEYS}
        self._by_value: dict[str, dict[str, str]] = {tag: {} for tag in CATEGORY_KEYS}

    def _category(self, category_tag: str) -> dict[str, JsonValue]:
        if category_tag not in self._entries:
            raise ValueError(f"Unknown style category: {category_tag}")
        return self._entries[category_tag]

    def register_value(self, preferred_name: str, value: JsonValue, category_tag: str) -> str:
        """
        Store a resolved value and return the name to reference it by.

        Args:
            preferred_name: Name to use if it is free.
            value: Resolved JSON value.
            category_tag: ``textStyle``, ``layout`` or ``style``.

        Returns:
            The existing name for an equal value, ``preferred_name``, or
            the first free suffixed variant of it.
        """
        entries = self._category(category_tag)
        key = canonical_json(value)

        existing = self._by_value[category_tag].get(key)
        if existing is not None:
            logger.debug("Reusing %s '%s'", category_tag, existing)
            return existing

        name = preferred_name
        suffix = 2
        while name in entries:
            name = f"{preferred_name}-{suffix}"
            suffix += 1
        if name != preferred_name:
            logger.debug("%s '%s' taken by a different value; using '%s'",
                         category_tag, preferred_name, name)

        entries[name] = copy.deepcopy(value)
        self._by_value[category_tag][key] = name
        return name

    def register_style(
        self,
        base_name: str,
        preferred_name: str,
        value_map: Mapping[str, Any],
        category_tag: str,
        *,
        registry: SpecRegistry,
    ) -> str:
        """
        Resolve the spec ``base_name`` and register the result.

        Raises:
            UnknownSpecError: If ``base_name`` is not in ``registry``.
            UnresolvedTokenError: If ``value_map`` misses a token.
        """
        resolved = registry.require_spec(base_name).substitute(value_map)
        return self.register_value(preferred_name, resolved, category_tag)

    def has(self, category_tag: str, name: str) -> bool:
        return name in self._category(category_tag)

    def get(self, category_tag: str, name: str) -> JsonValue | None:
        value = self._category(category_tag).get(name)
        return copy.deepcopy(value)

    def names(self, category_tag: str) -> list[str]:
        return list(self._category(category_tag))

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())

    def to_json(self) -> dict[str, dict[str, JsonValue]]:
        """Flattened tables keyed by document key, in registration order."""
        result: dict[str, dict[str, JsonValue]] = {}
        for tag, key in CATEGORY_KEYS.items():
            entries = self._entries[tag]
            if entries or tag in ALWAYS_EMITTED:
                result[key] = copy.deepcopy(entries)
        return result
