"""
Assembler component - ordered component tree and document serialization.

Ordering rules:
- ``meta`` nodes come first, ordered by the theme's meta component order
  (stable for equal kinds, unlisted kinds after listed ones)
- ``body`` nodes follow in encounter order

Invariants:
- I1: State moves INIT -> BUILDING -> ASSEMBLED -> SERIALIZED, never skipping
- I2: Every style/layout reference resolves when serialized
- I3: Serialized output is deterministic for the same input
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterator, Mapping
from typing import Any

from news_export.components.styles import StyleTable
from news_export.core.errors import DanglingReferenceError, ExportStateError
from news_export.domain.entities import Slot

from .models import HEADER_KEYS, REFERENCE_KEYS, TRAILER_KEYS, DocumentState, PlacedNode

logger = logging.getLogger(__name__)

DEFAULT_META_ORDER = ("cover", "slug", "title", "byline")


def iter_nodes(nodes: list[dict[str, Any]]) -> Iterator[dict[str, Any]]:
    """Depth-first walk over nodes and their nested ``components``."""
    for node in nodes:
        yield node
        children = node.get("components")
        if isinstance(children, list):
            yield from iter_nodes(children)


def check_references(nodes: list[dict[str, Any]], styles: StyleTable) -> None:
    """
    Verify every named style/layout reference exists in ``styles``.

    Inline (object) styles are not references and are skipped.

    Raises:
        DanglingReferenceError: On the first missing reference.
    """
    for node in iter_nodes(nodes):
        for key in REFERENCE_KEYS:
            ref = node.get(key)
            if isinstance(ref, str) and not styles.has(key, ref):
                raise DanglingReferenceError(key, ref)


class DocumentAssembler:
    """Collects built nodes for one export run and serializes the document."""

    def __init__(self, meta_order: list[str] | tuple[str, ...] | None = None) -> None:
        self._meta_order = list(meta_order) if meta_order else list(DEFAULT_META_ORDER)
        self._placed: list[PlacedNode] = []
        self._components: list[dict[str, Any]] = []
        self._state = DocumentState.INIT
        self._output: str | None = None

    @property
    def state(self) -> DocumentState:
        return self._state

    def _require(self, expected: DocumentState, action: str) -> None:
        if self._state != expected:
            raise ExportStateError(self._state.value, action)

    def begin(self) -> None:
        """Start accepting nodes."""
        self._require(DocumentState.INIT, "begin building")
        self._state = DocumentState.BUILDING

    def append(self, node: dict[str, Any], *, kind: str, slot: Slot = "body") -> None:
        """Add a built node; the assembler owns it from here on."""
        self._require(DocumentState.BUILDING, "append a component")
        self._placed.append(
            PlacedNode(kind=kind, slot=slot, sequence=len(self._placed), node=node)
        )

    def __len__(self) -> int:
        return len(self._placed)

    def _meta_rank(self, placed: PlacedNode) -> tuple[int, int]:
        try:
            rank = self._meta_order.index(placed.kind)
        except ValueError:
            rank = len(self._meta_order)
        return rank, placed.sequence

    def finalize(self) -> list[dict[str, Any]]:
        """
        Fix the component order.

        Returns:
            A copy of the ordered top-level components.
        """
        self._require(DocumentState.BUILDING, "finalize")
        meta = sorted((p for p in self._placed if p.slot == "meta"), key=self._meta_rank)
        body = [p for p in self._placed if p.slot == "body"]
        self._components = [p.node for p in meta + body]
        self._state = DocumentState.ASSEMBLED
        logger.debug("Assembled %d components (%d meta)", len(self._components), len(meta))
        return copy.deepcopy(self._components)

    @property
    def components(self) -> list[dict[str, Any]]:
        """Ordered components; available once assembled."""
        if self._state not in (DocumentState.ASSEMBLED, DocumentState.SERIALIZED):
            raise ExportStateError(self._state.value, "read components")
        return copy.deepcopy(self._components)

    def serialize(self, document_fields: Mapping[str, Any], styles: StyleTable) -> str:
        """
        Produce the final JSON document.

        Args:
            document_fields: Header and trailer values (version, identifier,
                language, title, layout, documentStyle, metadata).
            styles: The run's style table.

        Returns:
            Compact JSON string.

        Raises:
            DanglingReferenceError: If a node references a missing entry.
        """
        self._require(DocumentState.ASSEMBLED, "serialize")
        check_references(self._components, styles)

        document: dict[str, Any] = {}
        for key in HEADER_KEYS:
            if key in document_fields:
                document[key] = document_fields[key]
        document["components"] = self._components
        document.update(styles.to_json())
        for key in TRAILER_KEYS:
            if key in document_fields:
                document[key] = document_fields[key]

        self._output = json.dumps(document, ensure_ascii=False, separators=(",", ":"))
        self._state = DocumentState.SERIALIZED
        return self._output

    @property
    def output(self) -> str:
        """Serialized document; available once serialized."""
        if self._output is None:
            raise ExportStateError(self._state.value, "read output")
        return self._output
