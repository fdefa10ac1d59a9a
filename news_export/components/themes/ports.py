"""
Themes component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol


class ThemeRepoPort(Protocol):
    """Persistence for named themes and the used-theme pointer."""

    def load(self, name: str) -> dict[str, Any] | None:
        """
        Get saved theme values, or None if no theme has that name.

        Raises:
            InvalidThemeError: If the name or the stored values cannot be used.
        """
        ...

    def save(self, name: str, values: dict[str, Any]) -> None:
        """
        Save or replace a theme (upsert).

        Raises:
            InvalidThemeError: If the name cannot be stored.
        """
        ...

    def list_names(self) -> list[str]:
        """Names of all saved themes, sorted."""
        ...

    def get_used_name(self) -> str | None:
        """Name of the theme used for exports, or None if never chosen."""
        ...

    def set_used_name(self, name: str) -> None:
        """Choose the theme used for exports."""
        ...
