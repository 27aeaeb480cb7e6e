"""JSON serialization utilities for table models."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from ..core.models import TableModel
from ..core.table import create_table_model, normalize_table_model

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class TableImportError(ValueError):
    """Raised when table JSON cannot be decoded into a table model."""


def serialize_table_model(model: Any) -> Dict[str, Any]:
    """
    Serialize a table to its JSON-friendly, fully normalized shape.

    Keys use the camelCase wire names and absent optional fields are omitted.
    """
    normalized = normalize_table_model(model)
    return normalized.model_dump(mode="json", by_alias=True, exclude_none=True)


def dump_table_json(model: Any, indent: int = 2) -> str:
    """Serialize a table to JSON text."""
    return json.dumps(serialize_table_model(model), indent=indent, ensure_ascii=False)


def load_table_json(text: str) -> TableModel:
    """
    Decode JSON text into a normalized table model.

    Ragged rows, out-of-range header counts and non-positive strokes are
    repaired. Undecodable JSON or a payload that is not shaped like a table
    raises ``TableImportError``.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TableImportError(f"Invalid table JSON: {exc}") from exc
    return deserialize_table_model(payload)


def deserialize_table_model(payload: Any) -> TableModel:
    """Validate the outer shape of a decoded payload and normalize it."""
    if not isinstance(payload, dict):
        raise TableImportError("Table JSON must be an object")

    rows = payload.get("rows")
    if not isinstance(rows, list):
        raise TableImportError("Table JSON must contain a 'rows' array")
    for row_index, row in enumerate(rows):
        if not isinstance(row, list):
            raise TableImportError(f"Row {row_index} must be an array of cells")
        for column_index, cell in enumerate(row):
            if cell is not None and not isinstance(cell, (dict, str)):
                raise TableImportError(
                    f"Cell ({row_index}, {column_index}) must be an object or a string"
                )

    return create_table_model(payload)


def read_table_file(path: PathLike) -> TableModel:
    """Load a table model from a JSON file."""
    source = Path(path)
    logger.info("Reading table JSON from %s", source)
    return load_table_json(source.read_text(encoding="utf-8"))


def write_table_file(model: Any, path: PathLike) -> Path:
    """Write the normalized table JSON to ``path`` and return the path."""
    target = Path(path)
    target.write_text(dump_table_json(model) + "\n", encoding="utf-8")
    logger.info("Wrote table JSON to %s", target)
    return target
