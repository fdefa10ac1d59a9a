"""
Builders component - fragment kind to component builder dispatch.

Invariants:
- I1: Empty fragments produce no node and no style/layout entries
- I2: Every node is fully resolved before it is appended
- I3: Unknown fragment kinds and unknown specs abort the build
"""

from __future__ import annotations

import logging
from typing import Any

from news_export.core.errors import UnknownComponentError
from news_export.domain.entities import ContentFragment, Theme

from .base import Component
from .media import Caption, Cover, Divider, Photo
from .models import BuildContext
from .text import Body, Byline, Heading, Intro, Quote, Slug, Title

logger = logging.getLogger(__name__)

BUILDERS: dict[str, type[Component]] = {
    "body": Body,
    "heading": Heading,
    "slug": Slug,
    "title": Title,
    "byline": Byline,
    "intro": Intro,
    "quote": Quote,
    "photo": Photo,
    "caption": Caption,
    "cover": Cover,
    "divider": Divider,
}


def get_builder_class(kind: str) -> type[Component]:
    """
    Builder class for a fragment kind.

    Raises:
        UnknownComponentError: If no builder handles ``kind``.
    """
    builder = BUILDERS.get(kind)
    if builder is None:
        raise UnknownComponentError(kind)
    return builder


def create_builders(theme: Theme | None = None) -> dict[str, Component]:
    """One builder per kind, with the theme's spec overrides applied."""
    return {kind: builder(theme) for kind, builder in BUILDERS.items()}


def build_fragment(
    fragment: ContentFragment,
    ctx: BuildContext,
    builders: dict[str, Component],
) -> dict[str, Any] | None:
    """
    Build one fragment into the run's assembler.

    Returns:
        The appended node, or None if the fragment was empty.
    """
    builder = builders.get(fragment.kind)
    if builder is None:
        raise UnknownComponentError(fragment.kind)
    return builder.build(fragment, ctx)


def list_component_specs(theme: Theme | None = None) -> dict[str, dict[str, Any]]:
    """
    All specs of every component, as the theme would see them.

    Returns:
        ``{component_type: {spec_name: {"label", "template"}}}``
    """
    return {kind: builder.get_specs() for kind, builder in create_builders(theme).items()}
