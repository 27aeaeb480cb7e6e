"""Environment-driven defaults for Typst export."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from .services.typst_export import DEFAULT_INDENT, TypstExportOptions

INDENT_ENV_VAR = "TYPSTABLE_INDENT"
REPEAT_HEADER_ENV_VAR = "TYPSTABLE_REPEAT_HEADER"
WRAP_FIGURE_ENV_VAR = "TYPSTABLE_WRAP_FIGURE"

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    word = raw.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ConfigError(f"{name} must be one of true/false/yes/no/on/off/1/0, got {raw!r}")


def parse_indent(raw: Optional[str]) -> str:
    """Interpret an indent setting: a space count, ``tab``, or a literal string."""
    if raw is None or raw == "":
        return DEFAULT_INDENT
    if raw.isdigit():
        return " " * int(raw)
    if raw.strip().lower() in {"tab", "\\t"}:
        return "\t"
    return raw


@lru_cache(maxsize=1)
def get_export_defaults() -> TypstExportOptions:
    """Export options assembled from the environment (cached)."""
    return TypstExportOptions(
        indent=parse_indent(os.environ.get(INDENT_ENV_VAR)),
        repeat_header=_parse_bool(
            REPEAT_HEADER_ENV_VAR, os.environ.get(REPEAT_HEADER_ENV_VAR), True
        ),
        wrap_figure=_parse_bool(WRAP_FIGURE_ENV_VAR, os.environ.get(WRAP_FIGURE_ENV_VAR), True),
    )
