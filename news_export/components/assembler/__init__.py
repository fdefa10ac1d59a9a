"""
Assembler component - ordered component tree and document serialization.
"""

from .component import (
    DEFAULT_META_ORDER,
    DocumentAssembler,
    check_references,
    iter_nodes,
)
from .models import DocumentState, PlacedNode

__all__ = [
    "DEFAULT_META_ORDER",
    "DocumentAssembler",
    "DocumentState",
    "PlacedNode",
    "check_references",
    "iter_nodes",
]
