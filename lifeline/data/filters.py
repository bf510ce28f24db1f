"""PocketBase filter helpers."""

from __future__ import annotations


def escape_filter_value(value: str) -> str:
    """Escape a string value for use inside a double-quoted PocketBase filter literal.

    Backslashes are escaped before quotes so a trailing backslash cannot
    swallow the closing quote.
    """
    return value.replace("\\", "\\\\").replace('"', '\\"')
