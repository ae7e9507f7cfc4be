"""Render command - render a template to stdout or a file"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer

from kiwi.exceptions import KiwiError
from kiwi.processors import get_processor
from kiwi.template import Template

from .utils import handle_error, load_config, parse_vars, setup_logging, template_name

log = logging.getLogger(__name__)


def render_command(
    template: str,
    variables: Optional[list[str]] = None,
    config_path: Optional[Path] = None,
    output: Optional[Path] = None,
    processors: Optional[list[str]] = None,
    concurrent: bool = False,
    verbose: bool = False,
) -> None:
    """Render `template` with the given variables."""
    setup_logging(verbose)

    try:
        config = load_config(config_path)
        if concurrent:
            config = config.model_copy(update={"concurrent_compile": True})
        names = config.processors + list(processors or [])
        steps = [get_processor(name) for name in names]
        context = parse_vars(variables)

        async def _render() -> str:
            loaded = await Template.load(template_name(template), config=config)
            return await loaded.render(context, processors=steps)

        text = asyncio.run(_render())
    except (KiwiError, OSError) as exc:
        handle_error(exc)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        log.info("Wrote rendered output to %s", output)
        typer.echo(f"Wrote {output}", err=True)
    else:
        typer.echo(text, nl=False)
