"""
Specs component models.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from news_export.domain.json_values import JsonValue, find_tokens, substitute


@dataclass(frozen=True)
class Spec:
    """
    Named JSON template for one component type.

    The template is data only; it is validated and copied on registration.
    """

    name: str
    label: str
    template: JsonValue

    def tokens(self) -> set[str]:
        """Token identifiers used by the template."""
        return find_tokens(self.template)

    def substitute(self, values: Mapping[str, Any]) -> JsonValue:
        """Resolve the template with ``values`` (see json_values.substitute)."""
        return substitute(self.template, values)
