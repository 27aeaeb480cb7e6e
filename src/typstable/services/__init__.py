"""Services for rendering and serializing table models."""

from .display import column_title, format_cell_preview, summarize_table
from .format import (
    escape_set,
    escape_typst_inline,
    format_function,
    format_numeric,
    format_tuple,
    is_escaped,
)
from .json_serializer import (
    TableImportError,
    deserialize_table_model,
    dump_table_json,
    load_table_json,
    read_table_file,
    serialize_table_model,
    write_table_file,
)
from .tsv import table_from_tsv, table_to_tsv
from .typst_export import (
    TypstExportOptions,
    collect_stroke_commands,
    render_table_model_to_typst,
)

__all__ = [
    "TableImportError",
    "TypstExportOptions",
    "collect_stroke_commands",
    "column_title",
    "deserialize_table_model",
    "dump_table_json",
    "escape_set",
    "escape_typst_inline",
    "format_cell_preview",
    "format_function",
    "format_numeric",
    "format_tuple",
    "is_escaped",
    "load_table_json",
    "read_table_file",
    "render_table_model_to_typst",
    "serialize_table_model",
    "summarize_table",
    "table_from_tsv",
    "table_to_tsv",
    "write_table_file",
]
