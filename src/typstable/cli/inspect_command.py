"""
Inspect command for the typstable CLI.

Summarizes a table's shape, column hints and strokes as a rich table or JSON.
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.models import TableModel
from ..services.display import (
    format_caption,
    format_cell_preview,
    summarize_table,
)
from .utils import load_table_or_fail, table_file_argument

FormatChoice = click.Choice(["table", "json"], case_sensitive=False)


def _build_preview_table(model: TableModel, summary: dict) -> Table:
    table = Table(title=f"Caption: {escape(format_caption(model.caption))}", expand=False)
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    for column in summary["columns"]:
        justify = column["align"]
        header = f"{column['title']} ({column['width']})"
        table.add_column(header, justify=justify)

    header_rows = summary["headerRows"]
    for row_index, row in enumerate(model.rows):
        style = "bold magenta" if row_index < header_rows else None
        table.add_row(
            str(row_index),
            *(escape(format_cell_preview(cell)) for cell in row),
            style=style,
        )
    return table


@click.command("inspect")
@table_file_argument
@click.option(
    "--format",
    "output_format",
    type=FormatChoice,
    default="table",
    show_default=True,
    help="Output format.",
)
@click.pass_context
def inspect_table(ctx: click.Context, table_file: Path, output_format: str) -> None:
    """Show dimensions, header rows, column hints and strokes of TABLE_FILE."""
    model = load_table_or_fail(ctx, table_file)
    summary = summarize_table(model)

    if output_format.lower() == "json":
        click.echo(json.dumps(summary, indent=2, ensure_ascii=False))
        return

    console = Console(width=200, force_terminal=False)
    console.print(
        f"[green]{summary['rowCount']} rows x {summary['columnCount']} columns[/green], "
        f"header rows: {summary['headerRows']}"
    )
    console.print(_build_preview_table(model, summary))

    if summary["hlines"] or summary["vlines"]:
        strokes = Table(title="Strokes")
        strokes.add_column("Line", style="yellow")
        strokes.add_column("Boundary", justify="right")
        strokes.add_column("Stroke", justify="right")
        for entry in summary["hlines"]:
            strokes.add_row("hline", str(entry["y"]), entry["stroke"])
        for entry in summary["vlines"]:
            strokes.add_row("vline", str(entry["x"]), entry["stroke"])
        console.print(strokes)
