"""
Builders component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from news_export.components.assembler import DocumentAssembler
from news_export.components.styles import StyleTable
from news_export.domain.entities import ExportSettings, Theme


@dataclass(frozen=True)
class LayoutGrid:
    """
    Column grid derived from the theme.

    Centered bodies use a 9 column grid spanning the middle 7; left/right
    bodies use 7 columns spanning 5.
    """

    columns: int
    width: int
    margin: int
    gutter: int
    body_column_start: int
    body_column_span: int

    @classmethod
    def from_theme(cls, theme: Theme) -> LayoutGrid:
        orientation = theme.get_value("body_orientation") or "left"
        if orientation == "center":
            columns, start, span = 9, 1, 7
        elif orientation == "right":
            columns, start, span = 7, 2, 5
        else:
            columns, start, span = 7, 0, 5

        return cls(
            columns=columns,
            width=theme.get_int("layout_width", 1024),
            margin=theme.get_int("layout_margin", 100),
            gutter=theme.get_int("layout_gutter", 20),
            body_column_start=start,
            body_column_span=span,
        )

    def to_json(self) -> dict[str, Any]:
        """Document-level ``layout`` object."""
        return {
            "columns": self.columns,
            "width": self.width,
            "margin": self.margin,
            "gutter": self.gutter,
        }


@dataclass
class BuildContext:
    """Everything a builder needs for one export run."""

    theme: Theme
    settings: ExportSettings
    styles: StyleTable
    assembler: DocumentAssembler
    grid: LayoutGrid

    @classmethod
    def create(
        cls,
        theme: Theme,
        settings: ExportSettings,
        assembler: DocumentAssembler | None = None,
    ) -> BuildContext:
        """Fresh context with an empty style table."""
        if assembler is None:
            order = theme.get_value("meta_component_order")
            assembler = DocumentAssembler(order if isinstance(order, list) else None)
        return cls(
            theme=theme,
            settings=settings,
            styles=StyleTable(),
            assembler=assembler,
            grid=LayoutGrid.from_theme(theme),
        )
