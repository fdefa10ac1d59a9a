"""
Text component builders: body, heading, slug, title, byline, intro, quote.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from news_export.core.errors import InvalidFragmentError
from news_export.domain.entities import ContentFragment

from .base import Component, find_text_alignment, plain_text
from .models import BuildContext

_HEADING_TAG = re.compile(r"<h([1-6])\b", re.IGNORECASE)


class Body(Component):
    """A paragraph of body text."""

    component_type = "body"

    def register_specs(self) -> None:
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "body",
                "text": "#text#",
                "format": "#format#",
            },
        )

        self.register_spec(
            "default-body",
            "Style",
            {
                "textAlignment": "#text_alignment#",
                "fontName": "#body_font#",
                "fontSize": "#body_size#",
                "lineHeight": "#body_line_height#",
                "tracking": "#body_tracking#",
                "textColor": "#body_color#",
                "linkStyle": {
                    "textColor": "#body_link_color#",
                },
                "paragraphSpacingBefore": 12,
                "paragraphSpacingAfter": 12,
            },
        )

        self.register_spec(
            "body-layout",
            "Layout",
            {
                "margin": {
                    "top": 12,
                    "bottom": 12,
                },
            },
        )

    def build_node(self, fragment: ContentFragment, ctx: BuildContext) -> dict[str, Any]:
        text, text_format = self.format_text(fragment.markup, ctx)
        node = self.register_json("json", {"#text#": text, "#format#": text_format})

        theme = ctx.theme
        values = self.text_style_values(
            "body",
            find_text_alignment(fragment, theme),
            theme,
            font="AvenirNext-Regular",
            size=18,
            line_height=24,
            color="#4f4f4f",
        )
        values["#body_link_color#"] = theme.get_value("body_link_color") or "#428bca"
        self.register_style(node, "default-body", "default-body", values, ctx)
        self.register_body_layout(node, "body-layout", "body-layout", {}, ctx)
        return node


class Heading(Component):
    """Section headings, levels 1 to 6."""

    component_type = "heading"

    def register_specs(self) -> None:
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "#role#",
                "text": "#text#",
            },
        )

        for level in range(1, 7):
            self.register_spec(
                f"default-heading-{level}",
                f"Level {level} Style",
                {
                    "textAlignment": "#text_alignment#",
                    "fontName": f"#header{level}_font#",
                    "fontSize": f"#header{level}_size#",
                    "lineHeight": f"#header{level}_line_height#",
                    "tracking": f"#header{level}_tracking#",
                    "textColor": f"#header{level}_color#",
                },
            )

        self.register_spec(
            "heading-layout",
            "Layout",
            {
                "margin": {
                    "top": 15,
                    "bottom": 15,
                },
            },
        )

    @staticmethod
    def heading_level(fragment: ContentFragment) -> int:
        if fragment.level is not None:
            return min(max(int(fragment.level), 1), 6)
        match = _HEADING_TAG.search(fragment.markup)
        return int(match.group(1)) if match else 2

    def build_node(self, fragment: ContentFragment, ctx: BuildContext) -> dict[str, Any]:
        level = self.heading_level(fragment)
        node = self.register_json(
            "json",
            {"#role#": f"heading{level}", "#text#": plain_text(fragment.markup)},
        )

        theme = ctx.theme
        prefix = f"header{level}"
        values = self.text_style_values(
            prefix,
            find_text_alignment(fragment, theme),
            theme,
            font="AvenirNext-Bold",
            size=24,
            line_height=28,
            color=theme.get_value("header_color") or "#333333",
        )
        self.register_style(
            node, f"default-heading-{level}", f"default-heading-{level}", values, ctx
        )
        self.register_body_layout(node, "heading-layout", "heading-layout", {}, ctx)
        return node


class Slug(Component):
    """A short label shown above the title."""

    component_type = "slug"
    slot = "meta"

    def register_specs(self) -> None:
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "heading",
                "text": "#text#",
            },
        )

        self.register_spec(
            "default-slug",
            "Style",
            {
                "textAlignment": "#text_alignment#",
                "fontName": "#slug_font#",
                "fontSize": "#slug_size#",
                "lineHeight": "#slug_line_height#",
                "tracking": "#slug_tracking#",
                "textColor": "#slug_color#",
            },
        )

        self.register_spec(
            "slug-layout",
            "Layout",
            {
                "margin": {
                    "top": 10,
                    "bottom": 10,
                },
            },
        )

    def build_node(self, fragment: ContentFragment, ctx: BuildContext) -> dict[str, Any]:
        node = self.register_json("json", {"#text#": plain_text(fragment.markup)})
        self.set_default_style(node, fragment, ctx)
        self.register_full_width_layout(node, "slug-layout", "slug-layout", {}, ctx)
        return node

    def set_default_style(
        self, node: dict[str, Any], fragment: ContentFragment, ctx: BuildContext
    ) -> None:
        theme = ctx.theme
        self.register_style(
            node,
            "default-slug",
            "default-slug",
            {
                "#text_alignment#": find_text_alignment(fragment, theme),
                "#slug_font#": theme.get_value("slug_font") or "AvenirNext-DemiBold",
                "#slug_size#": theme.get_int("slug_size", 16),
                "#slug_line_height#": theme.get_int("slug_line_height", 24),
                "#slug_tracking#": theme.get_fraction("slug_tracking"),
                "#slug_color#": theme.get_value("slug_color") or "#7c7c7c",
            },
            ctx,
        )


class Title(Component):
    component_type = "title"
    slot = "meta"

    def register_specs(self) -> None:
        self.register_spec("json", "JSON", {"role": "title", "text": "#text#"})
        self.register_spec(
            "default-title",
            "Style",
            {
                "textAlignment": "#text_alignment#",
                "fontName": "#title_font#",
                "fontSize": "#title_size#",
                "lineHeight": "#title_line_height#",
                "tracking": "#title_tracking#",
                "textColor": "#title_color#",
            },
        )
        self.register_spec("title-layout", "Layout", {"margin": {"top": 30, "bottom": 0}})

    def build_node(self, fragment: ContentFragment, ctx: BuildContext) -> dict[str, Any]:
        node = self.register_json("json", {"#text#": plain_text(fragment.markup)})
        values = self.text_style_values(
            "title",
            find_text_alignment(fragment, ctx.theme),
            ctx.theme,
            font="AvenirNext-Bold",
            size=48,
            line_height=52,
            color="#333333",
        )
        self.register_style(node, "default-title", "default-title", values, ctx)
        self.register_full_width_layout(node, "title-layout", "title-layout", {}, ctx)
        return node


# --- Byline ---

DEFAULT_BYLINE_FORMAT = "by #author# | #date#"


def format_byline_date(value: datetime) -> str:
    """Render a date like ``Aug 26, 2016 | 12:00 PM``."""
    hour = value.hour % 12 or 12
    return f"{value:%b} {value.day}, {value.year} | {hour}:{value:%M} {value:%p}"


def format_byline(author: str, published_at: datetime | None, fmt: str | None = None) -> str:
    """
    Fill the theme's byline format.

    The date is substituted before the author so author names containing
    ``#`` are inserted verbatim.
    """
    text = fmt or DEFAULT_BYLINE_FORMAT
    date_text = format_byline_date(published_at) if published_at else ""
    text = text.replace("#date#", date_text).replace("#author#", author)
    return text.strip(" |")


def byline_date(fragment: ContentFragment) -> datetime | None:
    """
    Publication date of a byline fragment.

    Raises:
        InvalidFragmentError: If ``date`` is not a datetime or ISO 8601 string.
    """
    value = fragment.fields.get("date")
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise InvalidFragmentError(fragment.kind, f"date {value!r} is not ISO 8601") from e
    raise InvalidFragmentError(fragment.kind, f"date {value!r} is not a datetime")


class Byline(Component):
    component_type = "byline"
    slot = "meta"

    def register_specs(self) -> None:
        self.register_spec("json", "JSON", {"role": "byline", "text": "#text#"})
        self.register_spec(
            "default-byline",
            "Style",
            {
                "textAlignment": "#text_alignment#",
                "fontName": "#byline_font#",
                "fontSize": "#byline_size#",
                "lineHeight": "#byline_line_height#",
                "tracking": "#byline_tracking#",
                "textColor": "#byline_color#",
            },
        )
        self.register_spec("byline-layout", "Layout", {"margin": {"top": 10, "bottom": 10}})

    def has_content(self, fragment: ContentFragment) -> bool:
        author = str(fragment.fields.get("author") or "")
        return super().has_content(fragment) or bool(author.strip())

    def byline_text(self, fragment: ContentFragment, ctx: BuildContext) -> str:
        if super().has_content(fragment):
            return plain_text(fragment.markup)

        return format_byline(
            str(fragment.fields.get("author") or "").strip(),
            byline_date(fragment),
            ctx.theme.get_value("byline_format"),
        )

    def build_node(self, fragment: ContentFragment, ctx: BuildContext) -> dict[str, Any]:
        node = self.register_json("json", {"#text#": self.byline_text(fragment, ctx)})
        values = self.text_style_values(
            "byline",
            find_text_alignment(fragment, ctx.theme),
            ctx.theme,
            font="AvenirNext-Medium",
            size=13,
            line_height=24,
            color="#7c7c7c",
        )
        self.register_style(node, "default-byline", "default-byline", values, ctx)
        self.register_full_width_layout(node, "byline-layout", "byline-layout", {}, ctx)
        return node


class Intro(Component):
    """Post excerpt shown before the body."""

    component_type = "intro"

    def register_specs(self) -> None:
        self.register_spec(
            "json", "JSON", {"role": "intro", "text": "#text#", "format": "#format#"}
        )
        self.register_spec(
            "default-intro",
            "Style",
            {
                "textAlignment": "#text_alignment#",
                "fontName": "#intro_font#",
                "fontSize": "#intro_size#",
                "lineHeight": "#intro_line_height#",
                "tracking": "#intro_tracking#",
                "textColor": "#intro_color#",
            },
        )
        self.register_spec("intro-layout", "Layout", {"margin": {"top": 0, "bottom": 20}})

    def build_node(self, fragment: ContentFragment, ctx: BuildContext) -> dict[str, Any]:
        text, text_format = self.format_text(fragment.markup, ctx)
        node = self.register_json("json", {"#text#": text, "#format#": text_format})
        values = self.text_style_values(
            "intro",
            find_text_alignment(fragment, ctx.theme),
            ctx.theme,
            font="AvenirNext-DemiBold",
            size=18,
            line_height=24,
            color="#4f4f4f",
        )
        self.register_style(node, "default-intro", "default-intro", values, ctx)
        self.register_body_layout(node, "intro-layout", "intro-layout", {}, ctx)
        return node


class Quote(Component):
    """Pull quote."""

    component_type = "quote"

    def register_specs(self) -> None:
        self.register_spec(
            "json", "JSON", {"role": "quote", "text": "#text#", "format": "#format#"}
        )
        self.register_spec(
            "default-pullquote",
            "Style",
            {
                "textAlignment": "#text_alignment#",
                "fontName": "#pullquote_font#",
                "fontSize": "#pullquote_size#",
                "lineHeight": "#pullquote_line_height#",
                "tracking": "#pullquote_tracking#",
                "textColor": "#pullquote_color#",
                "textTransform": "#pullquote_transform#",
            },
        )
        self.register_spec("quote-layout", "Layout", {"margin": {"top": 12, "bottom": 12}})

    def build_node(self, fragment: ContentFragment, ctx: BuildContext) -> dict[str, Any]:
        text, text_format = self.format_text(fragment.markup, ctx)
        node = self.register_json("json", {"#text#": text, "#format#": text_format})

        theme = ctx.theme
        values = self.text_style_values(
            "pullquote",
            find_text_alignment(fragment, theme),
            theme,
            font="AvenirNext-Bold",
            size=48,
            line_height=48,
            color="#53585f",
        )
        values["#pullquote_transform#"] = theme.get_value("pullquote_transform")
        self.register_style(node, "default-pullquote", "default-pullquote", values, ctx)
        self.register_body_layout(node, "quote-layout", "quote-layout", {}, ctx)
        return node
