"""
Assembler component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from news_export.domain.entities import Slot


class DocumentState(str, Enum):
    """
    Per-run document lifecycle.

    INIT -> BUILDING -> ASSEMBLED -> SERIALIZED
    """

    INIT = "init"
    BUILDING = "building"
    ASSEMBLED = "assembled"
    SERIALIZED = "serialized"


@dataclass(frozen=True)
class PlacedNode:
    """A built node with the position rules that apply to it."""

    kind: str
    slot: Slot
    sequence: int
    node: dict[str, Any]


# Document keys in output order. Style tables are inserted after components.
HEADER_KEYS = ("version", "identifier", "language", "title", "layout")
TRAILER_KEYS = ("documentStyle", "metadata")

# Node keys holding references into the style table
REFERENCE_KEYS = ("textStyle", "layout", "style")
