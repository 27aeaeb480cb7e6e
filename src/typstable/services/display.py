"""
Display formatting services for the typstable CLI.

This module provides the labels and summaries shown by ``typstable inspect``.
"""

from __future__ import annotations

import string
from typing import Any, Dict, List, Optional

from ..core.models import Cell, TableModel
from ..core.table import get_table_dimensions
from .typst_export import build_column_aligns, build_column_widths, collect_stroke_commands

ALPHABET = string.ascii_uppercase
PREVIEW_WIDTH = 24


def column_title(index: int) -> str:
    """Spreadsheet-style column title: 0 -> A, 25 -> Z, 26 -> AA."""
    if index < 0:
        raise ValueError("column index must be non-negative")
    title = ""
    n = index
    while n >= 0:
        title = ALPHABET[n % len(ALPHABET)] + title
        n = n // len(ALPHABET) - 1
    return title


def format_cell_preview(cell: Cell, width: int = PREVIEW_WIDTH) -> str:
    """Single-line cell text with style markers, truncated to ``width``."""
    text = " ".join(cell.text.split())
    if len(text) > width:
        text = text[: width - 1] + "…"
    markers = []
    if cell.bold:
        markers.append("b")
    if cell.italic:
        markers.append("i")
    if cell.align:
        markers.append(cell.align[0])
    if markers:
        return f"{text} ({''.join(markers)})"
    return text


def format_caption(caption: Optional[str]) -> str:
    if not caption:
        return "--"
    return caption


def summarize_table(model: TableModel) -> Dict[str, Any]:
    """Build a JSON-friendly summary of a table's shape and styling."""
    row_count, column_count = get_table_dimensions(model)
    horizontal, vertical = collect_stroke_commands(model)
    columns: List[Dict[str, Any]] = [
        {"title": column_title(index), "width": width, "align": align}
        for index, (width, align) in enumerate(
            zip(build_column_widths(model), build_column_aligns(model))
        )
    ]
    return {
        "rowCount": row_count,
        "columnCount": column_count,
        "headerRows": model.header_rows or 0,
        "caption": model.caption,
        "columns": columns,
        "hlines": [{"y": boundary, "stroke": stroke} for boundary, stroke in horizontal],
        "vlines": [{"x": boundary, "stroke": stroke} for boundary, stroke in vertical],
    }
