"""
Escaping and formatting helpers for Typst code generation.

Typst reserves ``#`` for expressions and ``[``/``]`` for content blocks, so
user text must have those escaped before it is placed inside ``[...]``.
Escaping is a single left-to-right pass and leaves already-escaped sequences
alone, which makes it idempotent.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence

INLINE_ESCAPE_PATTERNS = ("#", "[", "]")


def is_escaped(source: str, index: int) -> bool:
    """Return True when the character at ``index`` follows an odd run of backslashes."""
    backslash_count = 0
    lookback = index - 1
    while lookback >= 0 and source[lookback] == "\\":
        backslash_count += 1
        lookback -= 1
    return backslash_count % 2 == 1


def escape_set(source: str, patterns: Sequence[str]) -> str:
    """
    Prefix every unescaped occurrence of any pattern with a backslash.

    Patterns are tried in the given order at each position. A multi-character
    pattern receives a single leading backslash and is then skipped as a whole.

    Known limitation: with ``"\\\\"`` as a pattern, an already-escaped pair of
    backslashes cannot be told apart from two raw ones, because the scan never
    looks ahead. ``"\\\\\\\\"`` therefore becomes three backslashes.
    """
    ordered = [pattern for pattern in patterns if pattern]
    pieces: List[str] = []
    index = 0
    while index < len(source):
        for pattern in ordered:
            if source.startswith(pattern, index) and not is_escaped(source, index):
                pieces.append(f"\\{pattern}")
                index += len(pattern)
                break
        else:
            pieces.append(source[index])
            index += 1
    return "".join(pieces)


def escape_typst_inline(value: str) -> str:
    """Escape text for use inside a Typst content block."""
    if not value:
        return ""
    normalized = value.replace("\r\n", "\n").replace("\r", "\n")
    return escape_set(normalized, INLINE_ESCAPE_PATTERNS)


def format_numeric(value: float) -> str:
    """Render whole numbers without decimals, others rounded to three places."""
    if float(value).is_integer():
        return str(int(value))
    text = f"{float(value):.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_length(value: float) -> str:
    return f"{format_numeric(value)}pt"


def format_stroke_value(value) -> str:
    if value == "none":
        return "none"
    return format_length(value)


def format_tuple(items: Iterable[str]) -> str:
    """Format Typst expressions as an array literal: ``(auto, 48pt)``."""
    return f"({', '.join(item.strip() for item in items)})"


def format_function(
    name: str,
    named: Optional[Mapping[str, str]] = None,
    unnamed: Optional[str] = None,
    *,
    multiline: bool = False,
    indent: str = "  ",
) -> str:
    """
    Format a Typst call expression.

    Named arguments keep their order and the unnamed argument is printed last.
    Values must already be valid Typst expressions. With ``multiline`` every
    argument goes on its own indented line.
    """
    args = [f"{key}: {value}" for key, value in (named or {}).items()]
    if unnamed:
        args.append(unnamed)
    if multiline and args:
        body = ",\n".join(indent_lines(args, indent))
        return f"{name}(\n{body}\n)"
    return f"{name}({', '.join(args)})"


def indent_lines(lines: Iterable[str], indent: str) -> List[str]:
    return [f"{indent}{line}" for line in lines]
