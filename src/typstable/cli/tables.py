"""
Table file commands for the typstable CLI.

Create blank tables, normalize existing table JSON and convert pasted TSV.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..core.table import TableShapeError, create_empty_table
from ..services.json_serializer import dump_table_json
from ..services.tsv import table_from_tsv
from .utils import load_table_or_fail, output_option, save_table, table_file_argument


def _emit(model, output: Optional[Path]) -> None:
    if output is None:
        click.echo(dump_table_json(model))
        return
    save_table(model, output)


@click.command("new")
@click.argument("rows", type=int)
@click.argument("columns", type=int)
@click.option("--header-rows", type=int, default=0, show_default=True, help="Header row count.")
@click.option("--caption", help="Table caption.")
@output_option
@click.pass_context
def new_table(
    ctx: click.Context,
    rows: int,
    columns: int,
    header_rows: int,
    caption: Optional[str],
    output: Optional[Path],
) -> None:
    """Create a blank ROWS x COLUMNS table."""
    try:
        model = create_empty_table(rows, columns, header_rows=header_rows, caption=caption)
    except TableShapeError as exc:
        ctx.fail(str(exc))
    _emit(model, output)


@click.command("normalize")
@table_file_argument
@output_option
@click.pass_context
def normalize(ctx: click.Context, table_file: Path, output: Optional[Path]) -> None:
    """Repair TABLE_FILE (ragged rows, header overflow, empty values)."""
    model = load_table_or_fail(ctx, table_file)
    _emit(model, output)


@click.command("from-tsv")
@click.argument("tsv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--header-rows", type=int, default=0, show_default=True, help="Header row count.")
@output_option
def from_tsv(tsv_file: Path, header_rows: int, output: Optional[Path]) -> None:
    """Convert tab-separated text into table JSON."""
    text = tsv_file.read_text(encoding="utf-8")
    _emit(table_from_tsv(text, header_rows=header_rows), output)
