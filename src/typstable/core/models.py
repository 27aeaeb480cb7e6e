"""
Core data models for Typst table generation.

This module defines the Pydantic models that make up a table: styled cells,
per-column hints and boundary strokes. The models carry no invariants of their
own; ``typstable.core.table`` normalizes them on every construction and edit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Align = Literal["left", "center", "right"]
ALIGN_VALUES = ("left", "center", "right")
DEFAULT_ALIGN: Align = "left"

Number = Union[int, float]
StrokeValue = Union[Literal["none"], Number]
ColumnWidth = Union[Literal["auto"], Number]


class Cell(BaseModel):
    """Inline content for a single table cell."""

    text: str = Field("", description="Cell text, stored verbatim")
    align: Optional[Align] = Field(None, description="Per-cell alignment override")
    bold: Optional[bool] = None
    italic: Optional[bool] = None


class ColumnSpec(BaseModel):
    """Column-wise rendering hints (width and default alignment)."""

    width: Optional[ColumnWidth] = Field(None, description="'auto' or a width in pt")
    align: Optional[Align] = None

    @property
    def is_empty(self) -> bool:
        return self.width is None and self.align is None


class RowStroke(BaseModel):
    """Horizontal stroke settings for one logical row."""

    top: Optional[StrokeValue] = None
    bottom: Optional[StrokeValue] = None

    @property
    def is_empty(self) -> bool:
        return self.top is None and self.bottom is None


class ColumnStroke(BaseModel):
    """Vertical stroke settings for one logical column."""

    left: Optional[StrokeValue] = None
    right: Optional[StrokeValue] = None

    @property
    def is_empty(self) -> bool:
        return self.left is None and self.right is None


class TableStrokes(BaseModel):
    """Aggregate stroke configuration for a table."""

    rows: Optional[List[RowStroke]] = None
    columns: Optional[List[ColumnStroke]] = None


class TableModel(BaseModel):
    """
    Persisted representation of a table.

    Field names are snake_case in Python and camelCase on the JSON wire
    (``headerRows``, ``columnSpecs``); both spellings are accepted on input.
    """

    model_config = ConfigDict(populate_by_name=True)

    rows: List[List[Cell]] = Field(..., description="Rectangular matrix of cells")
    header_rows: Optional[int] = Field(None, alias="headerRows")
    caption: Optional[str] = None
    column_specs: Optional[List[ColumnSpec]] = Field(None, alias="columnSpecs")
    strokes: Optional[TableStrokes] = None


@dataclass(frozen=True)
class CellPosition:
    """Coordinates pointing at a single cell within a table."""

    row_index: int
    column_index: int


class TableDimensions(NamedTuple):
    row_count: int
    column_count: int
