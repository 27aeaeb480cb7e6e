"""
Edit commands for the typstable CLI.

Each subcommand loads a table JSON file, applies one model operation and
writes the normalized result back (or to ``--output``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

import click

from ..core.models import TableModel
from ..core.selection import remove_columns, remove_rows
from ..core.table import (
    insert_column,
    insert_row,
    patch_cell,
    set_caption,
    set_header_rows,
    update_column_spec,
    update_column_stroke,
    update_row_stroke,
)
from .utils import (
    ALIGN_CHOICES,
    COLUMN_WIDTH,
    STROKE_VALUE,
    apply_model_change,
    load_table_or_fail,
    output_option,
    parse_align,
    save_table,
    table_file_argument,
)

AlignChoice = click.Choice(ALIGN_CHOICES, case_sensitive=False)


def _run_edit(
    ctx: click.Context,
    table_file: Path,
    output: Optional[Path],
    change: Callable[[TableModel], TableModel],
) -> None:
    model = load_table_or_fail(ctx, table_file)
    updated = apply_model_change(ctx, model, change)
    save_table(updated, output or table_file)


@click.group("edit")
def edit_group() -> None:
    """Apply a single edit to a table JSON file."""


@edit_group.command("set-cell")
@table_file_argument
@click.argument("row", type=int)
@click.argument("column", type=int)
@click.option("--text", help="Replace the cell text.")
@click.option("--bold/--no-bold", default=None, help="Toggle bold.")
@click.option("--italic/--no-italic", default=None, help="Toggle italic.")
@click.option("--align", type=AlignChoice, help="Cell alignment override ('none' clears it).")
@output_option
@click.pass_context
def set_cell_command(
    ctx: click.Context,
    table_file: Path,
    row: int,
    column: int,
    text: Optional[str],
    bold: Optional[bool],
    italic: Optional[bool],
    align: Optional[str],
    output: Optional[Path],
) -> None:
    """Patch the cell at ROW, COLUMN (zero-based)."""
    patch: Dict[str, Any] = {}
    if text is not None:
        patch["text"] = text
    if bold is not None:
        patch["bold"] = bold
    if italic is not None:
        patch["italic"] = italic
    if align is not None:
        patch["align"] = parse_align(align)
    if not patch:
        raise click.UsageError("Nothing to change; pass --text, --bold, --italic or --align.")

    _run_edit(ctx, table_file, output, lambda model: patch_cell(model, (row, column), patch))


@edit_group.command("insert-row")
@table_file_argument
@click.argument("index", type=int)
@click.option("--cell", "cells", multiple=True, help="Cell text, repeat per column.")
@output_option
@click.pass_context
def insert_row_command(
    ctx: click.Context,
    table_file: Path,
    index: int,
    cells: Tuple[str, ...],
    output: Optional[Path],
) -> None:
    """Insert a row before INDEX (use the row count to append)."""
    _run_edit(ctx, table_file, output, lambda model: insert_row(model, index, list(cells)))


@edit_group.command("remove-row")
@table_file_argument
@click.argument("index", type=int)
@click.option("--to", "end", type=int, help="Remove every row from INDEX through this one.")
@output_option
@click.pass_context
def remove_row_command(
    ctx: click.Context,
    table_file: Path,
    index: int,
    end: Optional[int],
    output: Optional[Path],
) -> None:
    """Remove the row at INDEX."""
    last = index if end is None else end
    _run_edit(ctx, table_file, output, lambda model: remove_rows(model, index, last))


@edit_group.command("insert-column")
@table_file_argument
@click.argument("index", type=int)
@click.option("--cell", "cells", multiple=True, help="Cell text, repeat per row.")
@output_option
@click.pass_context
def insert_column_command(
    ctx: click.Context,
    table_file: Path,
    index: int,
    cells: Tuple[str, ...],
    output: Optional[Path],
) -> None:
    """Insert a column before INDEX (use the column count to append)."""
    _run_edit(ctx, table_file, output, lambda model: insert_column(model, index, list(cells)))


@edit_group.command("remove-column")
@table_file_argument
@click.argument("index", type=int)
@click.option("--to", "end", type=int, help="Remove every column from INDEX through this one.")
@output_option
@click.pass_context
def remove_column_command(
    ctx: click.Context,
    table_file: Path,
    index: int,
    end: Optional[int],
    output: Optional[Path],
) -> None:
    """Remove the column at INDEX."""
    last = index if end is None else end
    _run_edit(ctx, table_file, output, lambda model: remove_columns(model, index, last))


@edit_group.command("header-rows")
@table_file_argument
@click.argument("count", type=int)
@output_option
@click.pass_context
def header_rows_command(
    ctx: click.Context, table_file: Path, count: int, output: Optional[Path]
) -> None:
    """Set the number of header rows (clamped to the row count)."""
    _run_edit(ctx, table_file, output, lambda model: set_header_rows(model, count))


@edit_group.command("caption")
@table_file_argument
@click.argument("text", required=False)
@output_option
@click.pass_context
def caption_command(
    ctx: click.Context, table_file: Path, text: Optional[str], output: Optional[Path]
) -> None:
    """Set the caption; omit TEXT to clear it."""
    _run_edit(ctx, table_file, output, lambda model: set_caption(model, text))


@edit_group.command("column")
@table_file_argument
@click.argument("index", type=int)
@click.option("--width", type=COLUMN_WIDTH, help="'auto' or a width in pt.")
@click.option("--align", type=AlignChoice, help="Default alignment for the column.")
@output_option
@click.pass_context
def column_command(
    ctx: click.Context,
    table_file: Path,
    index: int,
    width: Any,
    align: Optional[str],
    output: Optional[Path],
) -> None:
    """Replace the width/alignment hints of column INDEX; no options clears them."""
    spec = {"width": width, "align": parse_align(align)}
    _run_edit(ctx, table_file, output, lambda model: update_column_spec(model, index, spec))


@edit_group.command("row-stroke")
@table_file_argument
@click.argument("index", type=int)
@click.option("--top", type=STROKE_VALUE, help="Stroke above the row ('none' or pt).")
@click.option("--bottom", type=STROKE_VALUE, help="Stroke below the row ('none' or pt).")
@output_option
@click.pass_context
def row_stroke_command(
    ctx: click.Context,
    table_file: Path,
    index: int,
    top: Any,
    bottom: Any,
    output: Optional[Path],
) -> None:
    """Replace the strokes of row INDEX; no options clears them."""
    stroke = {"top": top, "bottom": bottom}
    _run_edit(ctx, table_file, output, lambda model: update_row_stroke(model, index, stroke))


@edit_group.command("column-stroke")
@table_file_argument
@click.argument("index", type=int)
@click.option("--left", type=STROKE_VALUE, help="Stroke left of the column ('none' or pt).")
@click.option("--right", type=STROKE_VALUE, help="Stroke right of the column ('none' or pt).")
@output_option
@click.pass_context
def column_stroke_command(
    ctx: click.Context,
    table_file: Path,
    index: int,
    left: Any,
    right: Any,
    output: Optional[Path],
) -> None:
    """Replace the strokes of column INDEX; no options clears them."""
    stroke = {"left": left, "right": right}
    _run_edit(ctx, table_file, output, lambda model: update_column_stroke(model, index, stroke))
