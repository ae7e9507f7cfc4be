"""Kiwi CLI Main Entry Point

Usage:
    kiwi render page                    # render page or page.kiwi
    kiwi render page --var name=World   # with variables
    kiwi render page -P strip -o out    # post-process and write to file
    kiwi resolve header --from page.kiwi
    kiwi --version
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from kiwi._version import __version__
from kiwi.commands import render_command, resolve_command

typer_app = typer.Typer(
    help="Kiwi - asynchronous template engine.", no_args_is_help=True
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"kiwi {__version__}")
        raise typer.Exit()


@typer_app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    pass


@typer_app.command()
def render(
    template: str = typer.Argument(..., help="Template path, extension optional."),
    var: Optional[List[str]] = typer.Option(
        None, "--var", help="Template variable as KEY=VALUE (repeatable)."
    ),
    config: Optional[Path] = typer.Option(
        None, "-c", "--config", help="Path to kiwi.yaml."
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write output to file instead of stdout."
    ),
    processor: Optional[List[str]] = typer.Option(
        None, "-P", "--processor", help="Post-processor to apply (repeatable)."
    ),
    concurrent: bool = typer.Option(
        False, "--concurrent", help="Compile tokens concurrently."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    """Render a template."""
    render_command(
        template,
        variables=var,
        config_path=config,
        output=output,
        processors=processor,
        concurrent=concurrent,
        verbose=verbose,
    )


@typer_app.command()
def resolve(
    name: str = typer.Argument(..., help="Template name to resolve."),
    parent: Optional[Path] = typer.Option(
        None, "--from", help="Template the name is relative to."
    ),
    config: Optional[Path] = typer.Option(
        None, "-c", "--config", help="Path to kiwi.yaml."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    """Print the file a template name resolves to."""
    resolve_command(name, parent=parent, config_path=config, verbose=verbose)


def app() -> None:
    """Entry point for the CLI."""
    typer_app()


if __name__ == "__main__":
    app()
