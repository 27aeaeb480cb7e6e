"""
Typst export: convert a ``TableModel`` into a ``#table(...)`` snippet.

Column widths are rendered as ``(auto | <n>pt)``, the column ``align`` tuple
only appears when a column deviates from ``left``, header rows become a
``table.header`` call and row/column strokes map to ``table.hline`` /
``table.vline`` with pt units. A captioned table is wrapped in ``#figure``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..core.models import DEFAULT_ALIGN, Cell, TableModel
from ..core.table import get_table_dimensions, normalize_table_model
from .format import (
    escape_typst_inline,
    format_function,
    format_length,
    format_stroke_value,
    format_tuple,
    indent_lines,
)

logger = logging.getLogger(__name__)

DEFAULT_INDENT = "  "
LABEL_PATTERN = re.compile(r"^[A-Za-z0-9_\-.:]+$")

StrokeCommand = Tuple[int, str]


@dataclass(frozen=True)
class TypstExportOptions:
    """Formatting levers for ``render_table_model_to_typst``."""

    indent: str = DEFAULT_INDENT
    repeat_header: bool = True
    wrap_figure: bool = True
    label: Optional[str] = None


def render_table_model_to_typst(
    model: Any, options: Optional[TypstExportOptions] = None, **overrides: Any
) -> str:
    """
    Render a table model into Typst code.

    The model is normalized first, so partially-populated input (ragged rows,
    out-of-range header counts) is accepted. Keyword overrides replace single
    fields of ``options``.
    """
    opts = replace(options or TypstExportOptions(), **overrides)
    if opts.label is not None and not LABEL_PATTERN.match(opts.label):
        raise ValueError(f"Invalid Typst label: {opts.label!r}")

    normalized = normalize_table_model(model)
    table_lines = _render_table_lines(normalized, opts.indent, opts.repeat_header)

    if normalized.caption and opts.wrap_figure:
        lines = [
            "#figure(",
            f"{opts.indent}caption: [{escape_typst_inline(normalized.caption)}],",
            f"{opts.indent}[",
            *indent_lines(table_lines, opts.indent * 2),
            f"{opts.indent}],",
            ")",
        ]
    else:
        lines = table_lines

    output = "\n".join(lines)
    if opts.label:
        output = f"{output} <{opts.label}>"
    return output


def build_column_widths(model: TableModel) -> List[str]:
    """Return the per-column width expressions (``auto`` or ``<n>pt``)."""
    _, column_count = get_table_dimensions(model)
    widths = []
    for column_index in range(column_count):
        spec = model.column_specs[column_index] if model.column_specs else None
        width = spec.width if spec and spec.width is not None else "auto"
        widths.append("auto" if width == "auto" else format_length(width))
    return widths


def build_column_aligns(model: TableModel) -> List[str]:
    """Return each column's resolved alignment, ``left`` when unset."""
    _, column_count = get_table_dimensions(model)
    aligns = []
    for column_index in range(column_count):
        spec = model.column_specs[column_index] if model.column_specs else None
        aligns.append(spec.align if spec and spec.align else DEFAULT_ALIGN)
    return aligns


def collect_stroke_commands(model: TableModel) -> Tuple[List[StrokeCommand], List[StrokeCommand]]:
    """
    Flatten row / column strokes into ``(boundary, stroke)`` pairs.

    Row ``r`` bottom and row ``r + 1`` top share boundary ``r + 1``; the value
    considered last wins. ``none`` values are omitted.
    """
    horizontal: Dict[int, str] = {}
    vertical: Dict[int, str] = {}

    if model.strokes is not None:
        for row_index, stroke in enumerate(model.strokes.rows or []):
            _record_boundary(horizontal, row_index, stroke.top)
            _record_boundary(horizontal, row_index + 1, stroke.bottom)
        for column_index, stroke in enumerate(model.strokes.columns or []):
            _record_boundary(vertical, column_index, stroke.left)
            _record_boundary(vertical, column_index + 1, stroke.right)

    return sorted(horizontal.items()), sorted(vertical.items())


def render_cell(cell: Cell, column_align: str) -> str:
    """
    Render one cell as a content block.

    Emphasis wraps italic first, then bold. An explicit ``table.cell(align:)``
    appears only when the cell disagrees with its column.
    """
    content = escape_typst_inline(cell.text)
    if cell.italic:
        content = f"#emph[{content}]"
    if cell.bold:
        content = f"#strong[{content}]"

    block = f"[{content}]"
    if cell.align and cell.align != column_align:
        return format_function("table.cell", named={"align": cell.align}) + block
    return block


def render_row(row: Sequence[Cell], column_aligns: Sequence[str]) -> str:
    return ", ".join(
        render_cell(cell, column_aligns[idx] if idx < len(column_aligns) else DEFAULT_ALIGN)
        for idx, cell in enumerate(row)
    )


def _render_table_lines(model: TableModel, indent: str, repeat_header: bool) -> List[str]:
    lines = ["#table("]
    lines.append(f"{indent}columns: {format_tuple(build_column_widths(model))},")

    column_aligns = build_column_aligns(model)
    if any(align != DEFAULT_ALIGN for align in column_aligns):
        lines.append(f"{indent}align: {format_tuple(column_aligns)},")

    header_count = model.header_rows or 0
    if header_count > 0:
        lines.append(f"{indent}table.header(")
        lines.append(f"{indent * 2}repeat: {'true' if repeat_header else 'false'},")
        for row in model.rows[:header_count]:
            lines.append(f"{indent * 2}{render_row(row, column_aligns)},")
        lines.append(f"{indent}),")

    horizontal, vertical = collect_stroke_commands(model)
    for boundary, stroke in horizontal:
        hline = format_function("table.hline", named={"y": str(boundary), "stroke": stroke})
        lines.append(f"{indent}{hline},")
    for boundary, stroke in vertical:
        vline = format_function("table.vline", named={"x": str(boundary), "stroke": stroke})
        lines.append(f"{indent}{vline},")

    for row in model.rows[header_count:]:
        lines.append(f"{indent}{render_row(row, column_aligns)},")

    lines.append(")")
    logger.debug(
        "Rendered table with %d header rows, %d hlines, %d vlines",
        header_count,
        len(horizontal),
        len(vertical),
    )
    return lines


def _record_boundary(target: Dict[int, str], boundary: int, value: Any) -> None:
    if value is None or value == "none":
        return
    if value <= 0:
        return
    target[boundary] = format_stroke_value(value)
