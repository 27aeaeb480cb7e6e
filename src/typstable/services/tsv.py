"""Tab-separated text conversion for pasting spreadsheet ranges."""

from __future__ import annotations

from typing import Any, Optional

from ..core.models import TableModel
from ..core.table import create_table_model, normalize_table_model


def table_from_tsv(text: str, header_rows: Optional[int] = None) -> TableModel:
    """
    Build a table from tab-separated text, one row per line.

    Short lines are padded with blank cells. A single trailing newline is
    ignored so that copied spreadsheet ranges do not gain an empty row.
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    if normalized.endswith("\n"):
        normalized = normalized[:-1]
    rows = [line.split("\t") for line in normalized.split("\n")]
    return create_table_model({"rows": rows, "header_rows": header_rows})


def table_to_tsv(model: Any) -> str:
    """Render cell texts as tab-separated lines; styling is dropped."""
    normalized = normalize_table_model(model)
    return "\n".join(
        "\t".join(_flatten(cell.text) for cell in row) for row in normalized.rows
    )


def _flatten(text: str) -> str:
    return text.replace("\t", " ").replace("\r\n", " ").replace("\n", " ").replace("\r", " ")
