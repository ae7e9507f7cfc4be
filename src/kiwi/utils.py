"""String helpers for compiled template output."""

from __future__ import annotations

import re

_QUOTE_OR_BACKSLASH = re.compile(r'([\\"])')


def escape_compiled_string(value: str) -> str:
    """Escape `value` for embedding in a double-quoted string literal.

    Backslashes and double quotes are escaped first, then newline, carriage
    return and tab become their two-character escapes. Nothing else changes.

    Not idempotent: escaping twice escapes the added backslashes again.
    """
    return (
        _QUOTE_OR_BACKSLASH.sub(r"\\\1", value)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
