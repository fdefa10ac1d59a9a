"""
Themes component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from news_export.domain.entities import Theme


@dataclass(frozen=True)
class ThemeValidationError:
    """Theme admin action error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class GetUsedThemeInput:
    """Input for resolving the theme used by exports."""

    pass


@dataclass(frozen=True)
class SaveThemeInput:
    """Input for saving a theme, optionally making it the used one."""

    theme: Theme
    make_used: bool = False


# --- Output Models ---


@dataclass(frozen=True)
class ThemeOutput:
    """Output containing a resolved theme."""

    theme: Theme | None
    errors: list[ThemeValidationError] = field(default_factory=list)
    success: bool = True
