"""Built-in post-processors, referenced by name from kiwi.yaml or the CLI."""

from __future__ import annotations

from typing import Any, Callable

from kiwi.exceptions import ProcessorError
from kiwi.utils import escape_compiled_string


def _require_text(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ProcessorError(name, f"expected text, got {type(value).__name__}")
    return value


def strip(value: Any) -> str:
    """Remove leading and trailing whitespace."""
    return _require_text("strip", value).strip()


def trim_lines(value: Any) -> str:
    """Remove trailing whitespace from every line."""
    text = _require_text("trim_lines", value)
    return "\n".join(line.rstrip() for line in text.split("\n"))


def escape(value: Any) -> str:
    """Escape output for embedding in a double-quoted string literal."""
    return escape_compiled_string(_require_text("escape", value))


BUILTIN_PROCESSORS: dict[str, Callable[..., Any]] = {
    "strip": strip,
    "trim_lines": trim_lines,
    "escape": escape,
}


def get_processor(name: str) -> Callable[..., Any]:
    """Get a built-in processor by name.

    Raises:
        ProcessorError: If no processor has that name.
    """
    try:
        return BUILTIN_PROCESSORS[name]
    except KeyError:
        available = ", ".join(sorted(BUILTIN_PROCESSORS))
        raise ProcessorError(name, f"unknown processor (available: {available})") from None


def list_builtin_processors() -> list[str]:
    return sorted(BUILTIN_PROCESSORS)
