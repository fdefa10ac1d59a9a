"""
Media component builders: photo, caption, cover, divider.

Photos and covers with a caption are grouped under one parent node holding
the ``photo`` child followed by the ``caption`` child.
"""

from __future__ import annotations

from typing import Any

from news_export.domain.entities import ContentFragment
from news_export.domain.markup import has_text

from .base import Component, find_text_alignment, plain_text
from .models import BuildContext

CAPTION_STYLE_SPEC: dict[str, Any] = {
    "textAlignment": "#text_alignment#",
    "fontName": "#caption_font#",
    "fontSize": "#caption_size#",
    "lineHeight": "#caption_line_height#",
    "tracking": "#caption_tracking#",
    "textColor": "#caption_color#",
}


class CaptionedComponent(Component):
    """Component that styles caption nodes."""

    def register_caption_specs(self) -> None:
        self.register_spec("default-caption", "Caption Style", CAPTION_STYLE_SPEC)
        self.register_spec(
            "caption-layout", "Caption Layout", {"margin": {"top": 0, "bottom": 12}}
        )

    def style_caption(
        self, node: dict[str, Any], fragment: ContentFragment, ctx: BuildContext
    ) -> None:
        values = self.text_style_values(
            "caption",
            find_text_alignment(fragment, ctx.theme),
            ctx.theme,
            font="AvenirNext-Italic",
            size=16,
            line_height=24,
            color="#4f4f4f",
        )
        self.register_style(node, "default-caption", "default-caption", values, ctx)
        self.register_body_layout(node, "caption-layout", "caption-layout", {}, ctx)

    def has_media(self, fragment: ContentFragment) -> bool:
        return bool(fragment.url and fragment.url.strip())

    def build_media_node(self, fragment: ContentFragment, ctx: BuildContext) -> dict[str, Any]:
        """Resolve ``json`` or, when captioned, ``json-with-caption``."""
        values: dict[str, Any] = {
            "#url#": fragment.url.strip() if fragment.url else "",
            "#alt#": fragment.fields.get("alt") or None,
        }
        caption = fragment_caption(fragment)
        if caption is None:
            return self.register_json("json", values)

        values["#caption#"] = caption
        node = self.register_json("json-with-caption", values)
        caption_node = _child(node, "caption")
        if caption_node is not None:
            self.style_caption(caption_node, fragment, ctx)
        return node


def fragment_caption(fragment: ContentFragment) -> str | None:
    """Caption text for a media fragment, or None when there is none."""
    caption = fragment.caption
    if caption is None or not has_text(caption):
        return None
    return plain_text(caption)


def _child(node: dict[str, Any], role: str) -> dict[str, Any] | None:
    for child in node.get("components", []):
        if isinstance(child, dict) and child.get("role") == role:
            return child
    return None


class Caption(CaptionedComponent):
    """Standalone caption text."""

    component_type = "caption"

    def register_specs(self) -> None:
        self.register_spec("json", "JSON", {"role": "caption", "text": "#text#"})
        self.register_caption_specs()

    def build_node(self, fragment: ContentFragment, ctx: BuildContext) -> dict[str, Any]:
        node = self.register_json("json", {"#text#": plain_text(fragment.markup)})
        self.style_caption(node, fragment, ctx)
        return node


class Photo(CaptionedComponent):
    """Inline image, optionally captioned."""

    component_type = "photo"

    def register_specs(self) -> None:
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "photo",
                "URL": "#url#",
                "accessibilityCaption": "#alt#",
            },
        )

        self.register_spec(
            "json-with-caption",
            "JSON With Caption",
            {
                "role": "container",
                "components": [
                    {
                        "role": "photo",
                        "URL": "#url#",
                        "accessibilityCaption": "#alt#",
                        "caption": {
                            "text": "#caption#",
                        },
                    },
                    {
                        "role": "caption",
                        "text": "#caption#",
                    },
                ],
            },
        )

        self.register_spec("photo-layout", "Layout", {"margin": {"top": 12, "bottom": 12}})
        self.register_caption_specs()

    def has_content(self, fragment: ContentFragment) -> bool:
        return self.has_media(fragment)

    def build_node(self, fragment: ContentFragment, ctx: BuildContext) -> dict[str, Any]:
        node = self.build_media_node(fragment, ctx)
        self.register_body_layout(node, "photo-layout", "photo-layout", {}, ctx)
        return node


class Cover(CaptionedComponent):
    """
    Lead image of the post.

    Always placed in the meta slot, so it precedes body text no matter
    where it appeared in the source.
    """

    component_type = "cover"
    slot = "meta"

    def register_specs(self) -> None:
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "photo",
                "URL": "#url#",
                "accessibilityCaption": "#alt#",
                "behavior": {
                    "type": "parallax",
                    "factor": 0.8,
                },
            },
        )

        self.register_spec(
            "json-with-caption",
            "JSON With Caption",
            {
                "role": "header",
                "components": [
                    {
                        "role": "photo",
                        "URL": "#url#",
                        "accessibilityCaption": "#alt#",
                        "caption": {
                            "text": "#caption#",
                        },
                    },
                    {
                        "role": "caption",
                        "text": "#caption#",
                    },
                ],
                "behavior": {
                    "type": "parallax",
                    "factor": 0.8,
                },
            },
        )

        self.register_spec(
            "header-photo-layout",
            "Layout",
            {
                "ignoreDocumentMargin": True,
                "minimumHeight": "40vh",
                "margin": {
                    "top": 0,
                    "bottom": 25,
                },
            },
        )
        self.register_caption_specs()

    def has_content(self, fragment: ContentFragment) -> bool:
        return self.has_media(fragment)

    def build_node(self, fragment: ContentFragment, ctx: BuildContext) -> dict[str, Any]:
        node = self.build_media_node(fragment, ctx)
        self.register_full_width_layout(
            node, "headerPhotoLayout", "header-photo-layout", {}, ctx
        )
        return node


class Divider(Component):
    component_type = "divider"

    def register_specs(self) -> None:
        self.register_spec(
            "json",
            "JSON",
            {
                "role": "divider",
                "stroke": {
                    "color": "#divider_color#",
                    "width": "#divider_width#",
                },
            },
        )
        self.register_spec("divider-layout", "Layout", {"margin": {"top": 25, "bottom": 25}})

    def has_content(self, fragment: ContentFragment) -> bool:
        return True

    def build_node(self, fragment: ContentFragment, ctx: BuildContext) -> dict[str, Any]:
        theme = ctx.theme
        node = self.register_json(
            "json",
            {
                "#divider_color#": theme.get_value("divider_color") or "#dddddd",
                "#divider_width#": theme.get_int("divider_width", 1),
            },
        )
        self.register_body_layout(node, "divider-layout", "divider-layout", {}, ctx)
        return node
