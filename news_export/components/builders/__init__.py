"""
Builders component - content fragments to component JSON nodes.
"""

from .base import Component, find_text_alignment, plain_text
from .component import (
    BUILDERS,
    build_fragment,
    create_builders,
    get_builder_class,
    list_component_specs,
)
from .media import Caption, CaptionedComponent, Cover, Divider, Photo
from .models import BuildContext, LayoutGrid
from .text import (
    Body,
    Byline,
    Heading,
    Intro,
    Quote,
    Slug,
    Title,
    format_byline,
    format_byline_date,
)

__all__ = [
    # Dispatch
    "BUILDERS",
    "build_fragment",
    "create_builders",
    "get_builder_class",
    "list_component_specs",
    # Context
    "BuildContext",
    "LayoutGrid",
    # Builders
    "Component",
    "CaptionedComponent",
    "Body",
    "Byline",
    "Caption",
    "Cover",
    "Divider",
    "Heading",
    "Intro",
    "Photo",
    "Quote",
    "Slug",
    "Title",
    # Helpers
    "find_text_alignment",
    "format_byline",
    "format_byline_date",
    "plain_text",
]
