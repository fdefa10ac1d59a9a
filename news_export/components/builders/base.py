"""
Base component builder.

A builder owns a SpecRegistry for its component type, registers its default
specs, applies the theme's overrides, and turns fragments into nodes:

1. skip fragments without content
2. resolve the node spec with fragment values
3. register default style and layout, attach their symbolic names
4. append the node to the run's assembler
"""

from __future__ import annotations

import logging
import re
from typing import Any, ClassVar

from news_export.components.specs import Spec, SpecRegistry
from news_export.core.errors import InvalidSpecError
from news_export.domain.entities import ContentFragment, Slot, Theme
from news_export.domain.json_values import JsonValue
from news_export.domain.markup import (
    ALIGNMENTS,
    clean_html,
    detect_alignment,
    has_text,
    html_to_markdown,
    strip_tags,
)

from .models import BuildContext

logger = logging.getLogger(__name__)

DEFAULT_ALIGNMENT = "left"


def plain_text(markup: str) -> str:
    """Visible text with whitespace collapsed."""
    return re.sub(r"\s+", " ", strip_tags(markup).replace("\xa0", " ")).strip()


def find_text_alignment(fragment: ContentFragment, theme: Theme) -> str:
    """
    Alignment for a text fragment.

    Explicit fragment alignment wins, then alignment found in the markup,
    then the theme-wide ``text_alignment``, then ``left``.
    """
    explicit = fragment.alignment or detect_alignment(fragment.markup)
    if explicit:
        explicit = explicit.lower()
        if explicit == "justify":
            explicit = "justified"
        if explicit in ALIGNMENTS:
            return explicit
        logger.debug("Ignoring unsupported alignment %r", explicit)

    themed = theme.get_value("text_alignment")
    if isinstance(themed, str) and themed in ALIGNMENTS:
        return themed
    return DEFAULT_ALIGNMENT


class Component:
    """Base class for fragment builders."""

    component_type: ClassVar[str] = ""
    slot: ClassVar[Slot] = "body"

    def __init__(self, theme: Theme | None = None) -> None:
        self.specs = SpecRegistry(self.component_type)
        self.register_specs()
        if theme is not None:
            overrides = theme.json_templates.get(self.component_type)
            if isinstance(overrides, dict) and overrides:
                self.specs.apply_overrides(overrides)

    # --- Specs ---

    def register_specs(self) -> None:
        raise NotImplementedError

    def register_spec(self, name: str, label: str, template: JsonValue) -> Spec:
        return self.specs.register_spec(name, label, template)

    def get_spec(self, name: str) -> Spec | None:
        return self.specs.get_spec(name)

    def get_specs(self) -> dict[str, dict[str, Any]]:
        return self.specs.get_all_specs()

    # --- Build ---

    def has_content(self, fragment: ContentFragment) -> bool:
        return has_text(fragment.markup)

    def build(self, fragment: ContentFragment, ctx: BuildContext) -> dict[str, Any] | None:
        """
        Build and append the node for ``fragment``.

        Returns:
            The appended node, or None for an empty fragment.
        """
        if not self.has_content(fragment):
            logger.debug("Skipping empty %s fragment", self.component_type)
            return None

        node = self.build_node(fragment, ctx)
        ctx.assembler.append(node, kind=self.component_type, slot=self.slot)
        return node

    def build_node(self, fragment: ContentFragment, ctx: BuildContext) -> dict[str, Any]:
        raise NotImplementedError

    # --- Helpers ---

    def register_json(self, spec_name: str, values: dict[str, Any]) -> dict[str, Any]:
        """Resolve a node spec; the result must be a JSON object."""
        node = self.specs.require_spec(spec_name).substitute(values)
        if not isinstance(node, dict):
            raise InvalidSpecError(
                f"'{spec_name}' for component '{self.component_type}' must be an object"
            )
        return node

    def register_style(
        self,
        node: dict[str, Any],
        name: str,
        spec_name: str,
        values: dict[str, Any],
        ctx: BuildContext,
        category: str = "textStyle",
    ) -> str:
        """Register a resolved style and reference it from ``node``."""
        symbolic = ctx.styles.register_style(
            spec_name, name, values, category, registry=self.specs
        )
        node[category] = symbolic
        return symbolic

    def _register_layout(
        self,
        node: dict[str, Any],
        name: str,
        spec_name: str,
        values: dict[str, Any],
        ctx: BuildContext,
        columns: dict[str, int],
    ) -> str:
        layout = self.specs.require_spec(spec_name).substitute(values)
        if not isinstance(layout, dict):
            raise InvalidSpecError(f"layout '{spec_name}' must be an object")
        for key, value in columns.items():
            layout.setdefault(key, value)
        symbolic = ctx.styles.register_value(name, layout, "layout")
        node["layout"] = symbolic
        return symbolic

    def register_full_width_layout(
        self,
        node: dict[str, Any],
        name: str,
        spec_name: str,
        values: dict[str, Any],
        ctx: BuildContext,
    ) -> str:
        """Layout spanning every column."""
        columns = {"columnStart": 0, "columnSpan": ctx.grid.columns}
        return self._register_layout(node, name, spec_name, values, ctx, columns)

    def register_body_layout(
        self,
        node: dict[str, Any],
        name: str,
        spec_name: str,
        values: dict[str, Any],
        ctx: BuildContext,
    ) -> str:
        """Layout aligned with the body text columns."""
        columns = {
            "columnStart": ctx.grid.body_column_start,
            "columnSpan": ctx.grid.body_column_span,
        }
        return self._register_layout(node, name, spec_name, values, ctx, columns)

    def format_text(self, markup: str, ctx: BuildContext) -> tuple[str, str]:
        """Body text and its ``format`` for the run's content format."""
        if ctx.settings.content_format == "markdown":
            return html_to_markdown(markup), "markdown"
        return clean_html(markup), "html"

    def text_style_values(
        self,
        prefix: str,
        alignment: str,
        theme: Theme,
        *,
        font: str,
        size: int,
        line_height: int,
        color: str,
    ) -> dict[str, Any]:
        """Token values for the common ``<prefix>_*`` text style keys."""
        return {
            "#text_alignment#": alignment,
            f"#{prefix}_font#": theme.get_value(f"{prefix}_font") or font,
            f"#{prefix}_size#": theme.get_int(f"{prefix}_size", size),
            f"#{prefix}_line_height#": theme.get_int(f"{prefix}_line_height", line_height),
            f"#{prefix}_tracking#": theme.get_fraction(f"{prefix}_tracking"),
            f"#{prefix}_color#": theme.get_value(f"{prefix}_color") or color,
        }
