"""Core table model and editing algebra."""

from .models import (
    Cell,
    CellPosition,
    ColumnSpec,
    ColumnStroke,
    RowStroke,
    TableDimensions,
    TableModel,
    TableStrokes,
)
from .selection import (
    CellRange,
    clear_range_borders,
    iter_range_positions,
    normalize_range,
    patch_range,
    remove_columns,
    remove_rows,
    set_range_borders,
)
from .table import (
    TableBoundsError,
    TableShapeError,
    create_empty_table,
    create_table_model,
    get_table_dimensions,
    insert_column,
    insert_row,
    normalize_table_model,
    patch_cell,
    patch_cells,
    rebuild_table,
    remove_column,
    remove_row,
    set_caption,
    set_column_align,
    set_header_rows,
    set_strokes,
    update_cell,
    update_cells,
    update_column_spec,
    update_column_stroke,
    update_row_stroke,
)

__all__ = [
    "Cell",
    "CellPosition",
    "CellRange",
    "ColumnSpec",
    "ColumnStroke",
    "RowStroke",
    "TableBoundsError",
    "TableDimensions",
    "TableModel",
    "TableShapeError",
    "TableStrokes",
    "clear_range_borders",
    "create_empty_table",
    "create_table_model",
    "get_table_dimensions",
    "insert_column",
    "insert_row",
    "iter_range_positions",
    "normalize_range",
    "normalize_table_model",
    "patch_cell",
    "patch_cells",
    "patch_range",
    "rebuild_table",
    "remove_column",
    "remove_columns",
    "remove_row",
    "remove_rows",
    "set_caption",
    "set_column_align",
    "set_header_rows",
    "set_range_borders",
    "set_strokes",
    "update_cell",
    "update_cells",
    "update_column_spec",
    "update_column_stroke",
    "update_row_stroke",
]
