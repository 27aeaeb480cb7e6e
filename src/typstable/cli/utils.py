"""
Shared CLI utilities and helper functions.

This module contains the parameter types and load/save helpers used across
CLI commands.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Callable, Optional

import click

from ..core.models import TableModel
from ..core.table import TableBoundsError, TableShapeError
from ..services.json_serializer import TableImportError, read_table_file, write_table_file

ALIGN_CHOICES = ["left", "center", "right", "none"]

MODEL_ERRORS = (TableBoundsError, TableShapeError)


class StrokeValueType(click.ParamType):
    """``none`` or a positive number of points."""

    name = "stroke"

    def convert(self, value, param, ctx):
        if isinstance(value, (int, float)) or value == "none":
            return value
        text = str(value).strip().lower().removesuffix("pt")
        if text == "none":
            return "none"
        try:
            number = float(text)
        except ValueError:
            self.fail(f"{value!r} is not 'none' or a number", param, ctx)
        if not math.isfinite(number):
            self.fail(f"{value!r} must be a finite number", param, ctx)
        if number <= 0:
            self.fail(f"{value!r} must be greater than zero", param, ctx)
        return int(number) if number.is_integer() else number


class ColumnWidthType(click.ParamType):
    """``auto`` or a positive number of points."""

    name = "width"

    def convert(self, value, param, ctx):
        if isinstance(value, (int, float)) or value == "auto":
            return value
        text = str(value).strip().lower().removesuffix("pt")
        if text == "auto":
            return "auto"
        try:
            number = float(text)
        except ValueError:
            self.fail(f"{value!r} is not 'auto' or a number", param, ctx)
        if not math.isfinite(number):
            self.fail(f"{value!r} must be a finite number", param, ctx)
        if number <= 0:
            self.fail(f"{value!r} must be greater than zero", param, ctx)
        return int(number) if number.is_integer() else number


STROKE_VALUE = StrokeValueType()
COLUMN_WIDTH = ColumnWidthType()

table_file_argument = click.argument(
    "table_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
output_option = click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Write the result to this file.",
)


def parse_align(value: Optional[str]) -> Optional[str]:
    """Map the ``none`` choice onto an absent alignment."""
    if value is None or value.lower() == "none":
        return None
    return value.lower()


def load_table_or_fail(ctx: click.Context, table_file: Path) -> TableModel:
    """Read a table JSON file, converting import errors into usage errors."""
    try:
        return read_table_file(table_file)
    except (TableImportError, TableShapeError) as exc:
        ctx.fail(f"{table_file}: {exc}")
    except OSError as exc:
        raise click.ClickException(f"Could not read {table_file}: {exc}") from exc


def apply_model_change(
    ctx: click.Context, model: TableModel, change: Callable[[TableModel], TableModel]
) -> TableModel:
    """Run a model operation, reporting bounds and shape errors as usage errors."""
    try:
        return change(model)
    except MODEL_ERRORS as exc:
        ctx.fail(str(exc))


def save_table(model: TableModel, target: Path) -> None:
    try:
        write_table_file(model, target)
    except OSError as exc:
        raise click.ClickException(f"Could not write {target}: {exc}") from exc
    click.echo(f"Wrote {target}", err=True)
