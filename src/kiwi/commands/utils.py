"""Shared utilities for CLI commands"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler

from kiwi.config import EngineConfig, find_config_file, load_engine_yaml
from kiwi.exceptions import KiwiError

console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the kiwi CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level - shows resolved template paths
    - Debug (KIWI_DEBUG=1): DEBUG level - shows every lookup candidate
    """
    if os.environ.get("KIWI_DEBUG"):
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=verbose,
        show_path=bool(os.environ.get("KIWI_DEBUG")),
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    kiwi_logger = logging.getLogger("kiwi")
    kiwi_logger.setLevel(level)
    kiwi_logger.handlers = [handler]
    kiwi_logger.propagate = False


def load_config(config_path: Path | None) -> EngineConfig:
    """Load kiwi.yaml from `config_path`, or the nearest one above cwd."""
    if config_path is not None and not config_path.exists():
        raise KiwiError(f"Config file not found: {config_path}")
    return load_engine_yaml(config_path or find_config_file())


def parse_vars(pairs: list[str] | None) -> dict[str, str]:
    """Parse KEY=VALUE pairs given with --var."""
    variables: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise KiwiError(f"Invalid --var '{pair}', expected KEY=VALUE", exit_code=2)
        variables[key.strip()] = value
    return variables


def template_name(arg: str) -> str:
    """Make a CLI template argument absolute so it never needs a parent."""
    return arg if arg.startswith("/") else os.path.abspath(arg)


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.echo(f"Error: {message}", err=True)
    sys.exit(exit_code)


def handle_error(error: Exception) -> NoReturn:
    """Handle and exit on kiwi errors."""
    if isinstance(error, KiwiError):
        exit_with_error(error.message, error.exit_code)
    exit_with_error(str(error))
