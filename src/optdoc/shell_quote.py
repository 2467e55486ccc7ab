"""Bash ANSI-C string literals."""

from __future__ import annotations


def escape_literal(text: str) -> str:
    # Backslashes first, or the escapes added below would be doubled.
    escaped = text.replace("\\", "\\\\")
    escaped = escaped.replace("\n", "\\n")
    return escaped.replace("'", "\\'")


def quote_literal(text: str) -> str:
    """Return text as a `$'...'` literal that bash reads back unchanged."""
    return f"$'{escape_literal(text)}'"
