"""CLI commands"""

from .render import render_command
from .resolve import resolve_command

__all__ = ["render_command", "resolve_command"]
