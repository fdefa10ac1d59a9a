"""
ThemeStore - named presentation settings and used-theme resolution.

Key behaviors:
- get_used_theme always returns a theme (built-in default if nothing saved)
- Saved values are overlaid on the built-in defaults
- Themes are read-only for the duration of an export
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from news_export.core.errors import InvalidThemeError, ThemeNotFoundError
from news_export.domain.entities import Theme

from .ports import ThemeRepoPort

logger = logging.getLogger(__name__)

DEFAULT_THEME_NAME = "Default"

# --- Default Theme ---

DEFAULT_THEME_VALUES: dict[str, Any] = {
    # Layout
    "layout_margin": 100,
    "layout_gutter": 20,
    "layout_width": 1024,
    "body_orientation": "left",
    "text_alignment": "left",
    "meta_component_order": ["cover", "slug", "title", "byline"],
    # Body
    "body_font": "AvenirNext-Regular",
    "body_size": 18,
    "body_line_height": 24,
    "body_tracking": 0,
    "body_color": "#4f4f4f",
    "body_link_color": "#428bca",
    "body_background_color": "#fafafa",
    # Headings
    "header_color": "#333333",
    "header1_font": "AvenirNext-Bold",
    "header1_size": 48,
    "header1_line_height": 52,
    "header2_font": "AvenirNext-Bold",
    "header2_size": 32,
    "header2_line_height": 36,
    "header3_font": "AvenirNext-Bold",
    "header3_size": 24,
    "header3_line_height": 28,
    "header4_font": "AvenirNext-Bold",
    "header4_size": 21,
    "header4_line_height": 26,
    "header5_font": "AvenirNext-Bold",
    "header5_size": 18,
    "header5_line_height": 24,
    "header6_font": "AvenirNext-Bold",
    "header6_size": 16,
    "header6_line_height": 22,
    # Title / slug / byline / intro
    "title_font": "AvenirNext-Bold",
    "title_size": 48,
    "title_line_height": 52,
    "title_tracking": 0,
    "title_color": "#333333",
    "slug_font": "AvenirNext-DemiBold",
    "slug_size": 16,
    "slug_line_height": 24,
    "slug_tracking": 0,
    "slug_color": "#7c7c7c",
    "byline_font": "AvenirNext-Medium",
    "byline_size": 13,
    "byline_line_height": 24,
    "byline_tracking": 0,
    "byline_color": "#7c7c7c",
    "byline_format": "by #author# | #date#",
    "intro_font": "AvenirNext-DemiBold",
    "intro_size": 18,
    "intro_line_height": 24,
    "intro_tracking": 0,
    "intro_color": "#4f4f4f",
    # Captions / quotes / dividers
    "caption_font": "AvenirNext-Italic",
    "caption_size": 16,
    "caption_line_height": 24,
    "caption_tracking": 0,
    "caption_color": "#4f4f4f",
    "pullquote_font": "AvenirNext-Bold",
    "pullquote_size": 48,
    "pullquote_line_height": 48,
    "pullquote_tracking": 0,
    "pullquote_color": "#53585f",
    "pullquote_transform": "uppercase",
    "divider_color": "#dddddd",
    "divider_width": 1,
    # Per-component spec overrides: {component_type: {spec_name: template}}
    "json_templates": {},
}


def get_default_theme() -> Theme:
    """
    Built-in theme used when nothing has been saved.

    Each call returns an independent copy.
    """
    return Theme(name=DEFAULT_THEME_NAME, values=copy.deepcopy(DEFAULT_THEME_VALUES))


def _overlay(name: str, saved: dict[str, Any]) -> Theme:
    values = copy.deepcopy(DEFAULT_THEME_VALUES)
    values.update(copy.deepcopy(saved))
    return Theme(name=name, values=values)


# --- Theme Store ---


class ThemeStore:
    """Theme lookup and used-theme resolution over a ThemeRepoPort."""

    def __init__(self, repo: ThemeRepoPort) -> None:
        self._repo = repo

    def get_theme(self, name: str) -> Theme | None:
        """Get a saved theme by name, or None."""
        saved = self._repo.load(name)
        if saved is None:
            return None
        return _overlay(name, saved)

    def list_themes(self) -> list[str]:
        return self._repo.list_names()

    def get_used_theme(self) -> Theme:
        """
        Theme to apply to exports.

        Falls back to the built-in default when no theme was chosen or the
        chosen one has since disappeared or become unreadable.
        """
        name = self._repo.get_used_name()
        if name is not None:
            try:
                theme = self.get_theme(name)
            except InvalidThemeError as e:
                logger.warning("%s; falling back to default", e)
                return get_default_theme()
            if theme is not None:
                return theme
            logger.warning("Used theme '%s' is missing; falling back to default", name)

        return get_default_theme()

    def save_theme(self, theme: Theme) -> Theme:
        self._repo.save(theme.name, dict(theme.values))
        logger.info("Saved theme '%s'", theme.name)
        return theme

    def set_used(self, name: str) -> None:
        """
        Choose the theme applied to exports.

        Raises:
            ThemeNotFoundError: If no theme with that name is saved.
            InvalidThemeError: If the saved theme cannot be read.
        """
        if self._repo.load(name) is None:
            raise ThemeNotFoundError(name)
        self._repo.set_used_name(name)
