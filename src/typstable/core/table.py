"""
Table model algebra.

The helpers in this module never mutate their inputs. Every operation returns
a fresh ``TableModel`` that already satisfies the normalization rules:
rectangular rows, clamped header count, column specs and strokes sized to the
table, empty values collapsed to ``None``.

Constructors and ``normalize_table_model`` repair malformed input; mutators on
an existing model reject out-of-range indices with ``TableBoundsError``.
"""

from __future__ import annotations

import logging
import math
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from .models import (
    ALIGN_VALUES,
    Cell,
    CellPosition,
    ColumnSpec,
    ColumnStroke,
    RowStroke,
    TableDimensions,
    TableModel,
    TableStrokes,
)

logger = logging.getLogger(__name__)

CellUpdater = Callable[[Cell], Any]
PositionLike = Union[CellPosition, Tuple[int, int], Mapping[str, int]]
CELL_FIELDS = tuple(Cell.model_fields)


class TableBoundsError(IndexError):
    """Raised when a row, column or stroke index falls outside the table."""


class TableShapeError(ValueError):
    """Raised when a table would end up without rows or columns."""


def create_empty_table(
    row_count: int,
    column_count: int,
    *,
    header_rows: Optional[int] = None,
    caption: Optional[str] = None,
    column_specs: Optional[Sequence[Any]] = None,
    strokes: Any = None,
) -> TableModel:
    """Create a table of blank cells. Both dimensions must be positive integers."""
    if not _is_index(row_count) or row_count <= 0:
        raise TableShapeError("row_count must be a positive integer")
    if not _is_index(column_count) or column_count <= 0:
        raise TableShapeError("column_count must be a positive integer")

    rows = [[Cell() for _ in range(column_count)] for _ in range(row_count)]
    return create_table_model(
        {
            "rows": rows,
            "header_rows": header_rows,
            "caption": caption,
            "column_specs": column_specs,
            "strokes": strokes,
        }
    )


def create_table_model(init: Any) -> TableModel:
    """
    Build a ``TableModel`` from a loose, possibly ragged shape.

    ``init`` may be a ``TableModel`` or a mapping using either snake_case or
    camelCase keys. Row entries may be ``Cell`` objects, mappings, plain strings
    or ``None``.
    """
    return normalize_table_model(init)


def normalize_table_model(model: Any) -> TableModel:
    """Return a normalized copy of ``model``; the single invariant chokepoint."""
    raw_rows = _read(model, "rows")
    rows_in = [list(row) if row is not None else [] for row in (raw_rows or [])]
    if not rows_in:
        raise TableShapeError("Table must contain at least one row")

    column_count = max(len(row) for row in rows_in)
    if column_count == 0:
        raise TableShapeError("Table must contain at least one column")

    if any(len(row) != column_count for row in rows_in):
        logger.debug("Padding ragged rows to %d columns", column_count)

    rows = [normalize_row(row, column_count) for row in rows_in]
    header_rows = _clamp_header_rows(_read(model, "header_rows", "headerRows"), len(rows))

    caption = _read(model, "caption")
    caption = str(caption) if caption is not None else None

    return TableModel(
        rows=rows,
        header_rows=header_rows or None,
        caption=caption or None,
        column_specs=normalize_column_specs(
            _read(model, "column_specs", "columnSpecs"), column_count
        ),
        strokes=normalize_strokes(_read(model, "strokes"), len(rows), column_count),
    )


def get_table_dimensions(model: TableModel) -> TableDimensions:
    """Return the current number of rows and columns."""
    column_count = max((len(row) for row in model.rows), default=0)
    return TableDimensions(len(model.rows), column_count)


def rebuild_table(model: TableModel, **changes: Any) -> TableModel:
    """Normalize ``model`` with some of its fields replaced."""
    source: Dict[str, Any] = {
        "rows": model.rows,
        "header_rows": model.header_rows,
        "caption": model.caption,
        "column_specs": model.column_specs,
        "strokes": model.strokes,
    }
    source.update(changes)
    return normalize_table_model(source)


def update_cell(model: TableModel, position: PositionLike, updater: CellUpdater) -> TableModel:
    """
    Replace one cell with ``updater(cell)``.

    The updater receives a private copy of the current cell and may return a
    ``Cell`` or a mapping of cell fields.
    """
    return update_cells(model, [position], updater)


def update_cells(
    model: TableModel, positions: Iterable[PositionLike], updater: CellUpdater
) -> TableModel:
    """Apply ``updater`` to every listed cell and normalize the table once."""
    row_count, column_count = get_table_dimensions(model)
    rows = [list(row) for row in model.rows]
    for position in positions:
        row_index, column_index = _resolve_position(position)
        _assert_in_bounds(row_index, row_count, "row_index")
        _assert_in_bounds(column_index, column_count, "column_index")
        current = rows[row_index][column_index].model_copy()
        rows[row_index][column_index] = normalize_cell(updater(current))
    return rebuild_table(model, rows=rows)


def patch_cell(
    model: TableModel,
    position: PositionLike,
    patch: Optional[Mapping[str, Any]] = None,
    **fields: Any,
) -> TableModel:
    """Shallow-merge ``patch`` (and keyword fields) into one cell."""
    return patch_cells(model, [position], patch, **fields)


def patch_cells(
    model: TableModel,
    positions: Iterable[PositionLike],
    patch: Optional[Mapping[str, Any]] = None,
    **fields: Any,
) -> TableModel:
    """Merge the same patch into several cells. Unknown field names raise ``TypeError``."""
    changes: Dict[str, Any] = dict(patch or {})
    changes.update(fields)
    unknown = set(changes) - set(CELL_FIELDS)
    if unknown:
        raise TypeError(f"Unknown cell field(s): {', '.join(sorted(unknown))}")

    def _merge(cell: Cell) -> Dict[str, Any]:
        merged = cell.model_dump()
        merged.update(changes)
        return merged

    return update_cells(model, positions, _merge)


def insert_row(
    model: TableModel, row_index: int, row: Optional[Sequence[Any]] = None
) -> TableModel:
    """
    Insert a blank (or provided) row at ``row_index``; ``row_count`` appends.

    The new row is padded or truncated to the column count. Header rows grow
    when the insertion lands inside or directly below the header block.
    """
    row_count, column_count = get_table_dimensions(model)
    _assert_insert_index(row_index, row_count, "row_index")

    rows = list(model.rows)
    rows.insert(row_index, normalize_row(row or [], column_count))

    header_rows = model.header_rows or 0
    if header_rows and row_index <= header_rows:
        header_rows += 1

    strokes = _stroke_payload(model)
    strokes["rows"] = _splice(strokes["rows"], row_count, row_index, insert=True)
    return rebuild_table(model, rows=rows, header_rows=header_rows, strokes=strokes)


def remove_row(model: TableModel, row_index: int) -> TableModel:
    """Remove one row. The last remaining row cannot be removed."""
    row_count, _ = get_table_dimensions(model)
    _assert_in_bounds(row_index, row_count, "row_index")
    if row_count <= 1:
        raise TableShapeError("Table must contain at least one row")

    rows = list(model.rows)
    del rows[row_index]

    header_rows = model.header_rows or 0
    if row_index < header_rows:
        header_rows -= 1

    strokes = _stroke_payload(model)
    strokes["rows"] = _splice(strokes["rows"], row_count, row_index, insert=False)
    return rebuild_table(model, rows=rows, header_rows=header_rows, strokes=strokes)


def insert_column(
    model: TableModel, column_index: int, column: Optional[Sequence[Any]] = None
) -> TableModel:
    """
    Insert a column at ``column_index``; ``column_count`` appends.

    ``column`` optionally supplies one cell per row. Column specs and column
    strokes receive a blank entry at the same index.
    """
    row_count, column_count = get_table_dimensions(model)
    _assert_insert_index(column_index, column_count, "column_index")

    values = list(column or [])
    rows = []
    for row_idx, row in enumerate(model.rows):
        next_row = list(row)
        value = values[row_idx] if row_idx < len(values) else None
        next_row.insert(column_index, normalize_cell(value))
        rows.append(next_row)

    strokes = _stroke_payload(model)
    strokes["columns"] = _splice(strokes["columns"], column_count, column_index, insert=True)
    column_specs = _splice(model.column_specs, column_count, column_index, insert=True)
    return rebuild_table(model, rows=rows, column_specs=column_specs, strokes=strokes)


def remove_column(model: TableModel, column_index: int) -> TableModel:
    """Remove one column together with its spec and stroke entries."""
    _, column_count = get_table_dimensions(model)
    _assert_in_bounds(column_index, column_count, "column_index")
    if column_count <= 1:
        raise TableShapeError("Table must contain at least one column")

    rows = []
    for row in model.rows:
        next_row = list(row)
        del next_row[column_index]
        rows.append(next_row)

    strokes = _stroke_payload(model)
    strokes["columns"] = _splice(strokes["columns"], column_count, column_index, insert=False)
    column_specs = _splice(model.column_specs, column_count, column_index, insert=False)
    return rebuild_table(model, rows=rows, column_specs=column_specs, strokes=strokes)


def set_header_rows(model: TableModel, header_rows: Optional[int]) -> TableModel:
    """Change the number of header rows, clamped to ``[0, row_count]``."""
    return rebuild_table(model, header_rows=header_rows)


def set_caption(model: TableModel, caption: Optional[str]) -> TableModel:
    """Update the caption; ``None`` or an empty string clears it."""
    return rebuild_table(model, caption=caption)


def update_column_spec(model: TableModel, column_index: int, spec: Any) -> TableModel:
    """Replace one column's spec. ``None`` clears every hint for the column."""
    _, column_count = get_table_dimensions(model)
    _assert_in_bounds(column_index, column_count, "column_index")

    column_specs = _padded(model.column_specs, column_count)
    column_specs[column_index] = spec
    return rebuild_table(model, column_specs=column_specs)


def set_column_align(model: TableModel, column_index: int, align: Optional[str]) -> TableModel:
    """Set a column's default alignment and drop per-cell overrides in that column."""
    _, column_count = get_table_dimensions(model)
    _assert_in_bounds(column_index, column_count, "column_index")

    current = model.column_specs[column_index] if model.column_specs else ColumnSpec()
    column_specs = _padded(model.column_specs, column_count)
    column_specs[column_index] = {"width": current.width, "align": align}

    rows = []
    for row in model.rows:
        next_row = list(row)
        next_row[column_index] = next_row[column_index].model_copy(update={"align": None})
        rows.append(next_row)
    return rebuild_table(model, rows=rows, column_specs=column_specs)


def update_row_stroke(model: TableModel, row_index: int, stroke: Any) -> TableModel:
    """Replace the stroke entry of one row; ``None`` clears it."""
    row_count, _ = get_table_dimensions(model)
    _assert_in_bounds(row_index, row_count, "row_index")

    strokes = _stroke_payload(model)
    entries = _padded(strokes["rows"], row_count)
    entries[row_index] = stroke
    strokes["rows"] = entries
    return rebuild_table(model, strokes=strokes)


def update_column_stroke(model: TableModel, column_index: int, stroke: Any) -> TableModel:
    """Replace the stroke entry of one column; ``None`` clears it."""
    _, column_count = get_table_dimensions(model)
    _assert_in_bounds(column_index, column_count, "column_index")

    strokes = _stroke_payload(model)
    entries = _padded(strokes["columns"], column_count)
    entries[column_index] = stroke
    strokes["columns"] = entries
    return rebuild_table(model, strokes=strokes)


def set_strokes(model: TableModel, strokes: Any) -> TableModel:
    """Replace the entire stroke configuration."""
    return rebuild_table(model, strokes=strokes)


def normalize_cell(value: Any = None) -> Cell:
    """Coerce a ``Cell``, mapping, string or ``None`` into a fresh ``Cell``."""
    if value is None:
        return Cell()
    if isinstance(value, str):
        return Cell(text=value)

    text = _read(value, "text")
    align = _read(value, "align")
    if align is not None and align not in ALIGN_VALUES:
        logger.debug("Dropping unsupported cell alignment %r", align)
        align = None
    bold = _read(value, "bold")
    italic = _read(value, "italic")

    return Cell(
        text="" if text is None else str(text),
        align=align,
        bold=None if bold is None else bool(bold),
        italic=None if italic is None else bool(italic),
    )


def normalize_row(row: Sequence[Any], column_count: int) -> List[Cell]:
    """Pad or truncate ``row`` to exactly ``column_count`` cells."""
    cells = list(row)
    return [
        normalize_cell(cells[idx]) if idx < len(cells) else Cell() for idx in range(column_count)
    ]


def normalize_column_specs(specs: Any, column_count: int) -> Optional[List[ColumnSpec]]:
    """Size column specs to the table; collapse to ``None`` when nothing is set."""
    entries = _as_list(specs, "column specs")
    if not entries:
        return None

    normalized = [
        _normalize_column_spec(entries[idx]) if idx < len(entries) else ColumnSpec()
        for idx in range(column_count)
    ]
    if all(spec.is_empty for spec in normalized):
        return None
    return normalized


def normalize_strokes(strokes: Any, row_count: int, column_count: int) -> Optional[TableStrokes]:
    """Size stroke arrays to the table and drop empty or non-positive values."""
    if not strokes:
        return None

    rows = _normalize_stroke_entries(_read(strokes, "rows"), row_count, _normalize_row_stroke)
    columns = _normalize_stroke_entries(
        _read(strokes, "columns"), column_count, _normalize_column_stroke
    )

    has_rows = rows is not None and any(not entry.is_empty for entry in rows)
    has_columns = columns is not None and any(not entry.is_empty for entry in columns)
    if not has_rows and not has_columns:
        return None

    return TableStrokes(
        rows=rows if has_rows else None,
        columns=columns if has_columns else None,
    )


def normalize_stroke_value(value: Any) -> Any:
    """Return ``"none"``, a positive finite number, or ``None`` for anything else."""
    if value == "none":
        return "none"
    if not _is_positive_number(value):
        return None
    return value


def _normalize_column_spec(spec: Any) -> ColumnSpec:
    if spec is None:
        return ColumnSpec()

    width = _read(spec, "width")
    if width != "auto" and not _is_positive_number(width):
        width = None

    align = _read(spec, "align")
    if align not in ALIGN_VALUES:
        align = None
    return ColumnSpec(width=width, align=align)


def _normalize_row_stroke(entry: Any) -> RowStroke:
    return RowStroke(
        top=normalize_stroke_value(_read(entry, "top")),
        bottom=normalize_stroke_value(_read(entry, "bottom")),
    )


def _normalize_column_stroke(entry: Any) -> ColumnStroke:
    return ColumnStroke(
        left=normalize_stroke_value(_read(entry, "left")),
        right=normalize_stroke_value(_read(entry, "right")),
    )


def _normalize_stroke_entries(
    entries: Any,
    length: int,
    normalize: Callable[[Any], Any],
) -> Optional[List[Any]]:
    items = _as_list(entries, "stroke entries")
    if not items:
        return None
    return [normalize(items[idx] if idx < len(items) else None) for idx in range(length)]


def _stroke_payload(model: TableModel) -> Dict[str, Any]:
    if model.strokes is None:
        return {"rows": None, "columns": None}
    return {"rows": model.strokes.rows, "columns": model.strokes.columns}


def _padded(entries: Optional[Sequence[Any]], length: int) -> List[Any]:
    items = list(entries or [])
    return [items[idx] if idx < len(items) else None for idx in range(length)]


def _splice(
    entries: Optional[Sequence[Any]], length: int, index: int, *, insert: bool
) -> Optional[List[Any]]:
    """Insert a blank slot at (or delete the slot at) ``index`` of a sized list."""
    if not entries:
        return None
    items = _padded(entries, length)
    if insert:
        items.insert(index, None)
    else:
        del items[index]
    return items


def _as_list(value: Any, label: str) -> Optional[List[Any]]:
    """Return list or tuple input as a list; any other shape counts as absent."""
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        logger.debug("Ignoring %s that are not a list: %r", label, value)
        return None
    return list(value)


def _read(source: Any, *names: str) -> Any:
    """Read the first present field from a mapping or attribute-bearing object."""
    if source is None:
        return None
    if isinstance(source, Mapping):
        for name in names:
            if name in source:
                return source[name]
        return None
    for name in names:
        value = getattr(source, name, None)
        if value is not None:
            return value
    return None


def _resolve_position(position: PositionLike) -> Tuple[Any, Any]:
    if isinstance(position, CellPosition):
        return position.row_index, position.column_index
    if isinstance(position, Mapping):
        return (
            _read(position, "row_index", "rowIndex"),
            _read(position, "column_index", "columnIndex"),
        )
    row_index, column_index = position
    return row_index, column_index


def _clamp_header_rows(value: Any, row_count: int) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return int(min(max(number, 0), row_count))


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_positive_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def _assert_in_bounds(index: Any, length: int, label: str) -> None:
    if not _is_index(index) or index < 0 or index >= length:
        raise TableBoundsError(f"{label} {index!r} is out of bounds (expected 0 to {length - 1})")


def _assert_insert_index(index: Any, length: int, label: str) -> None:
    if not _is_index(index) or index < 0 or index > length:
        raise TableBoundsError(
            f"{label} {index!r} is out of bounds for insertion (expected 0 to {length})"
        )
