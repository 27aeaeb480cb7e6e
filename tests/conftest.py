"""Pytest configuration and fixtures."""

import pytest

from typstable import config as config_module
from typstable.core.models import Cell
from typstable.core.table import create_table_model


@pytest.fixture(autouse=True)
def isolated_export_defaults(monkeypatch):
    """Ensure tests start without export environment overrides and with a fresh cache."""

    for name in (
        config_module.INDENT_ENV_VAR,
        config_module.REPEAT_HEADER_ENV_VAR,
        config_module.WRAP_FIGURE_ENV_VAR,
    ):
        monkeypatch.delenv(name, raising=False)
    config_module.get_export_defaults.cache_clear()
    try:
        yield
    finally:
        config_module.get_export_defaults.cache_clear()


@pytest.fixture
def metrics_table():
    """Three rows by two columns with one header row and a right-aligned value column."""
    return create_table_model(
        {
            "rows": [
                [Cell(text="Metric", bold=True), Cell(text="Value", bold=True, align="right")],
                ["Latency", "12 ms"],
                ["Throughput", "1.2k req/s"],
            ],
            "header_rows": 1,
            "caption": "Service metrics",
            "strokes": {"rows": [{"bottom": 0.6}]},
        }
    )
