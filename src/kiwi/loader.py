"""Loader - reads resolved template files."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from kiwi import fs
from kiwi.exceptions import RenderError

log = logging.getLogger(__name__)

ReadText = Callable[[str, str], Awaitable[str]]


async def load_template(
    path: str, *, encoding: str = "utf-8", read: ReadText | None = None
) -> str:
    """Load the content of an already resolved template path.

    The path is not checked again: a file removed after resolution surfaces
    as the `OSError` raised by `read`.

    Args:
        path: Resolved template path.
        encoding: Text encoding of the file.
        read: Coroutine used to read the file. Defaults to `kiwi.fs.read_text`.

    Returns:
        The template source.

    Raises:
        RenderError: If the file is not valid text in `encoding`.
    """
    read = read or fs.read_text
    try:
        source = await read(path, encoding)
    except UnicodeDecodeError as exc:
        raise RenderError(
            f"Can't decode template `{path}` as {encoding}: {exc.reason}."
        ) from exc
    log.debug("Loaded template %s (%d chars)", path, len(source))
    return source
