"""
typstable - Typst table generation from JSON table models.

A Python package for editing spreadsheet-like table models and rendering them
as Typst ``#table(...)`` markup.
"""

__version__ = "0.1.0"

from .core.models import (
    Cell,
    CellPosition,
    ColumnSpec,
    ColumnStroke,
    RowStroke,
    TableModel,
    TableStrokes,
)
from .core.table import (
    TableBoundsError,
    TableShapeError,
    create_empty_table,
    create_table_model,
    get_table_dimensions,
    insert_column,
    insert_row,
    normalize_table_model,
    patch_cell,
    remove_column,
    remove_row,
    set_caption,
    set_header_rows,
    set_strokes,
    update_cell,
    update_column_spec,
    update_column_stroke,
    update_row_stroke,
)
from .services.json_serializer import TableImportError, dump_table_json, load_table_json
from .services.typst_export import TypstExportOptions, render_table_model_to_typst

__all__ = [
    "Cell",
    "CellPosition",
    "ColumnSpec",
    "ColumnStroke",
    "RowStroke",
    "TableModel",
    "TableStrokes",
    "TableBoundsError",
    "TableShapeError",
    "TableImportError",
    "TypstExportOptions",
    "create_empty_table",
    "create_table_model",
    "normalize_table_model",
    "get_table_dimensions",
    "update_cell",
    "patch_cell",
    "insert_row",
    "remove_row",
    "insert_column",
    "remove_column",
    "set_header_rows",
    "set_caption",
    "update_column_spec",
    "update_row_stroke",
    "update_column_stroke",
    "set_strokes",
    "render_table_model_to_typst",
    "dump_table_json",
    "load_table_json",
]
