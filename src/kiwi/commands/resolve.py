"""Resolve command - print the file a template name resolves to"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer

from kiwi.config import TemplateOptions
from kiwi.exceptions import KiwiError
from kiwi.resolver import Resolver

from .utils import handle_error, load_config, setup_logging, template_name


class _Origin:
    """Stand-in parent template carrying only a path."""

    def __init__(self, path: str):
        self.options = TemplateOptions(path=path)


def resolve_command(
    name: str,
    parent: Optional[Path] = None,
    config_path: Optional[Path] = None,
    verbose: bool = False,
) -> None:
    """Resolve `name`, relative to `parent` when given."""
    setup_logging(verbose)

    try:
        config = load_config(config_path)
        origin = _Origin(template_name(str(parent))) if parent is not None else None
        path = asyncio.run(Resolver(config).resolve(name, origin))
    except (KiwiError, OSError) as exc:
        handle_error(exc)

    typer.echo(path)
