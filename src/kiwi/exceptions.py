"""Kiwi Exceptions

Custom exceptions raised while resolving, loading and rendering templates.
"""

from __future__ import annotations

from typing import Any


class KiwiError(Exception):
    """Base exception for all kiwi errors."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class RenderError(KiwiError):
    """Raised when a template cannot be located or rendered."""

    pass


class RelativePathError(RenderError):
    """Raised when a relative name is looked up without an originating path."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Can't locate template `{name}`. "
            "Relative path without original path given."
        )


class TemplateNotFoundError(RenderError):
    """Raised when neither the bare nor the extended candidate exists."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Can't locate template `{path}`.")


class TokenCompileError(RenderError):
    """Raised when a token fails to compile."""

    def __init__(self, token: Any, reason: str):
        self.token = token
        super().__init__(f"Failed to compile {token!r}: {reason}")


class ProcessorError(KiwiError):
    """Raised by a pipeline processor that cannot handle its input."""

    def __init__(self, processor: str, reason: str):
        self.processor = processor
        super().__init__(f"Processor `{processor}` failed: {reason}")


class ConfigError(KiwiError):
    """Raised when the engine configuration file is invalid."""

    pass
