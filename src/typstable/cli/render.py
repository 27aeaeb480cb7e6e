"""
Render command for the typstable CLI.

Converts a table JSON file into Typst markup.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Optional

import click

from ..config import ConfigError, get_export_defaults
from ..services.typst_export import render_table_model_to_typst
from .utils import load_table_or_fail, output_option, table_file_argument


@click.command()
@table_file_argument
@click.option("--indent", type=click.IntRange(min=0), help="Spaces per indentation level.")
@click.option(
    "--repeat-header/--no-repeat-header",
    default=None,
    help="Repeat header rows on every page (default from TYPSTABLE_REPEAT_HEADER, else on).",
)
@click.option(
    "--figure/--no-figure",
    "wrap_figure",
    default=None,
    help="Wrap captioned tables in #figure (default from TYPSTABLE_WRAP_FIGURE, else on).",
)
@click.option("--label", help="Attach a Typst label, e.g. tab:results.")
@output_option
@click.pass_context
def render(
    ctx: click.Context,
    table_file: Path,
    indent: Optional[int],
    repeat_header: Optional[bool],
    wrap_figure: Optional[bool],
    label: Optional[str],
    output: Optional[Path],
) -> None:
    """Render TABLE_FILE as Typst markup."""
    try:
        options = get_export_defaults()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if indent is not None:
        options = replace(options, indent=" " * indent)
    if repeat_header is not None:
        options = replace(options, repeat_header=repeat_header)
    if wrap_figure is not None:
        options = replace(options, wrap_figure=wrap_figure)
    if label:
        options = replace(options, label=label)

    model = load_table_or_fail(ctx, table_file)
    try:
        typst = render_table_model_to_typst(model, options)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--label") from exc

    if output is None:
        click.echo(typst)
        return
    output.write_text(typst + "\n", encoding="utf-8")
    click.echo(f"Wrote {output}", err=True)
