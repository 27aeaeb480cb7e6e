"""
Rectangular cell ranges and the edits applied to them.

A range is stored as two corners. ``normalize_range`` clamps the corners to
the table and orders them. The editing helpers below work on the normalized
form and build the whole edit before normalizing the table once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .models import (
    CellPosition,
    ColumnStroke,
    RowStroke,
    StrokeValue,
    TableModel,
    TableStrokes,
)
from .table import (
    TableBoundsError,
    TableShapeError,
    get_table_dimensions,
    patch_cells,
    rebuild_table,
    set_strokes,
)

BORDER_EDGES = ("top", "bottom", "left", "right")
DEFAULT_BORDER_STROKE: StrokeValue = 1


@dataclass(frozen=True)
class CellRange:
    """Two corners of a rectangular selection (inclusive)."""

    start: CellPosition
    end: CellPosition

    @classmethod
    def from_bounds(
        cls, start_row: int, start_column: int, end_row: int, end_column: int
    ) -> "CellRange":
        return cls(CellPosition(start_row, start_column), CellPosition(end_row, end_column))


def normalize_range(model: TableModel, cell_range: CellRange) -> Optional[CellRange]:
    """
    Clamp a range to the table and order its corners.

    Returns ``None`` when neither corner lies inside the table. A range whose
    corners are both outside but still overlaps the table is treated as
    outside as well.
    """
    row_count, column_count = get_table_dimensions(model)

    def _inside(position: CellPosition) -> bool:
        return 0 <= position.row_index < row_count and 0 <= position.column_index < column_count

    if not _inside(cell_range.start) and not _inside(cell_range.end):
        return None

    rows = [
        _clamp(cell_range.start.row_index, row_count),
        _clamp(cell_range.end.row_index, row_count),
    ]
    columns = [
        _clamp(cell_range.start.column_index, column_count),
        _clamp(cell_range.end.column_index, column_count),
    ]
    return CellRange(
        CellPosition(min(rows), min(columns)),
        CellPosition(max(rows), max(columns)),
    )


def iter_range_positions(cell_range: CellRange) -> Iterator[CellPosition]:
    """Yield every position of the range in row-major order."""
    top = min(cell_range.start.row_index, cell_range.end.row_index)
    bottom = max(cell_range.start.row_index, cell_range.end.row_index)
    left = min(cell_range.start.column_index, cell_range.end.column_index)
    right = max(cell_range.start.column_index, cell_range.end.column_index)
    for row_index in range(top, bottom + 1):
        for column_index in range(left, right + 1):
            yield CellPosition(row_index, column_index)



def patch_range(model: TableModel, cell_range: CellRange, **patch: Any) -> TableModel:
    """Apply the same cell patch (``bold=True``, ``align="center"``...) to every cell."""
    resolved = _require_range(model, cell_range)
    return patch_cells(model, iter_range_positions(resolved), patch)


def set_range_borders(
    model: TableModel,
    cell_range: CellRange,
    edges: Iterable[str] = ("all",),
    stroke: StrokeValue = DEFAULT_BORDER_STROKE,
) -> TableModel:
    """
    Draw borders around (or through) a range.

    ``edges`` selects among ``top``, ``bottom``, ``left`` and ``right``; ``all``
    additionally draws every inner boundary of the range.
    """
    resolved = _require_range(model, cell_range)
    wanted = set(edges)
    unknown = wanted - set(BORDER_EDGES) - {"all"}
    if unknown:
        raise ValueError(f"Unknown border edge(s): {', '.join(sorted(unknown))}")

    start, end = resolved.start, resolved.end
    rows, columns = _editable_strokes(model)
    if "all" in wanted:
        for row_index in range(start.row_index, end.row_index + 1):
            rows[row_index].update(top=stroke, bottom=stroke)
        for column_index in range(start.column_index, end.column_index + 1):
            columns[column_index].update(left=stroke, right=stroke)
    else:
        if "top" in wanted:
            rows[start.row_index]["top"] = stroke
        if "bottom" in wanted:
            rows[end.row_index]["bottom"] = stroke
        if "left" in wanted:
            columns[start.column_index]["left"] = stroke
        if "right" in wanted:
            columns[end.column_index]["right"] = stroke
    return set_strokes(model, {"rows": rows, "columns": columns})


def clear_range_borders(model: TableModel, cell_range: CellRange) -> TableModel:
    """
    Remove every stroke on the boundaries touching a range.

    A boundary can be recorded on either neighbour (row ``r`` bottom and row
    ``r + 1`` top), so the neighbours just outside the range are cleared too.
    """
    resolved = _require_range(model, cell_range)
    start, end = resolved.start, resolved.end
    rows, columns = _editable_strokes(model)

    for row_index in range(start.row_index, end.row_index + 1):
        rows[row_index].update(top=None, bottom=None)
    if start.row_index > 0:
        rows[start.row_index - 1]["bottom"] = None
    if end.row_index + 1 < len(rows):
        rows[end.row_index + 1]["top"] = None

    for column_index in range(start.column_index, end.column_index + 1):
        columns[column_index].update(left=None, right=None)
    if start.column_index > 0:
        columns[start.column_index - 1]["right"] = None
    if end.column_index + 1 < len(columns):
        columns[end.column_index + 1]["left"] = None
    return set_strokes(model, {"rows": rows, "columns": columns})


def remove_rows(model: TableModel, start: int, end: int) -> TableModel:
    """
    Remove the inclusive row span ``start..end``.

    The header shrinks by the number of removed header rows and row strokes
    are dropped with their rows.
    """
    row_count, _ = get_table_dimensions(model)
    low, high = _validate_span(start, end, row_count, "row")
    if high - low + 1 >= row_count:
        raise TableShapeError("Table must contain at least one row")

    header_rows = model.header_rows or 0
    header_rows -= max(0, min(high + 1, header_rows) - low)

    strokes = None
    if model.strokes is not None:
        stroke_rows = model.strokes.rows
        if stroke_rows is not None:
            stroke_rows = _without_span(stroke_rows, low, high)
        strokes = {"rows": stroke_rows, "columns": model.strokes.columns}

    return rebuild_table(
        model,
        rows=_without_span(model.rows, low, high),
        header_rows=header_rows,
        strokes=strokes,
    )


def remove_columns(model: TableModel, start: int, end: int) -> TableModel:
    """Remove the inclusive column span ``start..end`` with its specs and strokes."""
    _, column_count = get_table_dimensions(model)
    low, high = _validate_span(start, end, column_count, "column")
    if high - low + 1 >= column_count:
        raise TableShapeError("Table must contain at least one column")

    column_specs = model.column_specs
    if column_specs is not None:
        column_specs = _without_span(column_specs, low, high)

    strokes = None
    if model.strokes is not None:
        stroke_columns = model.strokes.columns
        if stroke_columns is not None:
            stroke_columns = _without_span(stroke_columns, low, high)
        strokes = {"rows": model.strokes.rows, "columns": stroke_columns}

    return rebuild_table(
        model,
        rows=[_without_span(row, low, high) for row in model.rows],
        column_specs=column_specs,
        strokes=strokes,
    )


def _editable_strokes(model: TableModel) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Plain-dict copies of every row and column stroke entry, sized to the table."""
    row_count, column_count = get_table_dimensions(model)
    current = model.strokes or TableStrokes()
    rows = current.rows or [RowStroke() for _ in range(row_count)]
    columns = current.columns or [ColumnStroke() for _ in range(column_count)]
    return [entry.model_dump() for entry in rows], [entry.model_dump() for entry in columns]


def _without_span(items: Sequence[Any], low: int, high: int) -> List[Any]:
    return list(items[:low]) + list(items[high + 1 :])


def _require_range(model: TableModel, cell_range: CellRange) -> CellRange:
    resolved = normalize_range(model, cell_range)
    if resolved is None:
        raise TableBoundsError("cell range lies entirely outside the table")
    return resolved


def _validate_span(start: Any, end: Any, length: int, label: str) -> tuple:
    for value in (start, end):
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < length:
            raise TableBoundsError(
                f"{label} index {value!r} is out of bounds (expected 0 to {length - 1})"
            )
    return min(start, end), max(start, end)


def _clamp(value: int, length: int) -> int:
    return min(max(value, 0), length - 1)
