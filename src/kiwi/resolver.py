"""Resolver - turns a template name into a single confirmed file path.

Lookup policy:
1. Names not starting with "/" are relative to the directory of the parent
   template's own path. A relative name without such a path cannot be
   resolved.
2. The name is tried as-is first; no extension is implied.
3. If that fails and the name does not already end in the default
   extension, the extension is appended and tried once more.

The result is only valid at the time of the check. Nothing guarantees the
file still exists when it is read.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Awaitable, Callable

from kiwi import fs
from kiwi.config import DEFAULT_FILE_EXTENSION, EngineConfig
from kiwi.exceptions import RelativePathError, TemplateNotFoundError

log = logging.getLogger(__name__)

Exists = Callable[[str], Awaitable[bool]]


def _parent_path(parent_template: Any) -> str | None:
    """Read the originating path of `parent_template`, if it has one."""
    if parent_template is None:
        return None
    options = getattr(parent_template, "options", None)
    return getattr(options, "path", None)


async def lookup_template(
    name: str,
    parent_template: Any = None,
    *,
    extension: str = DEFAULT_FILE_EXTENSION,
    exists: Exists | None = None,
) -> str:
    """Look up `name` relative to `parent_template`.

    Args:
        name: Template name, absolute ("/x/y") or relative ("y", "../y").
        parent_template: Object exposing `options.path`. Only read for
            relative names.
        extension: Default template extension.
        exists: Coroutine answering whether a path exists. Defaults to
            `kiwi.fs.exists`.

    Returns:
        The first candidate that exists.

    Raises:
        RelativePathError: If `name` is relative and the parent has no path.
        TemplateNotFoundError: If no candidate exists.
    """
    exists = exists or fs.exists

    if not name.startswith("/"):
        origin = _parent_path(parent_template)
        if not origin:
            raise RelativePathError(name)
        name = os.path.normpath(os.path.join(os.path.dirname(origin), name))

    log.debug("Trying template candidate %s", name)
    if await exists(name):
        return name

    ext = os.path.splitext(name)[1]
    if ext and ext == extension:
        raise TemplateNotFoundError(name)

    extended = name + extension
    log.debug("Trying template candidate %s", extended)
    if not await exists(extended):
        raise TemplateNotFoundError(extended)
    return extended


class Resolver:
    """Resolves template names using the engine's lookup settings."""

    def __init__(
        self, config: EngineConfig | None = None, exists: Exists | None = None
    ):
        """Initialize resolver.

        Args:
            config: Engine settings. Defaults to `EngineConfig()`.
            exists: Existence check override (useful for tests and
                non-filesystem sources).
        """
        self.config = config or EngineConfig()
        self._exists = exists or fs.exists

    async def resolve(self, name: str, parent_template: Any = None) -> str:
        """Resolve `name` to a confirmed path. See `lookup_template`."""
        path = await lookup_template(
            name,
            parent_template,
            extension=self.config.extension,
            exists=self._exists,
        )
        log.info("Resolved template %s -> %s", name, path)
        return path
