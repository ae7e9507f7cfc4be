"""Template - ties resolution, loading, parsing and compilation together.

Render flow:
    name -> Resolver -> path -> loader -> source -> parser -> tokens
         -> compile_tokens -> text -> apply_all(post-processors) -> output
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping, Sequence

from kiwi.compiler import compile_tokens
from kiwi.config import EngineConfig, TemplateOptions
from kiwi.exceptions import RenderError
from kiwi.loader import ReadText, load_template
from kiwi.parser import parse
from kiwi.pipeline import apply_all
from kiwi.processors import get_processor
from kiwi.resolver import Resolver
from kiwi.tokens import BaseToken

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Compiler:
    """Context shared by every token compiled in one pass.

    Tokens only read it. Includes get their own child context.
    """

    template: "Template"
    variables: Mapping[str, Any] = field(default_factory=dict)
    depth: int = 0

    @property
    def config(self) -> EngineConfig:
        return self.template.config

    async def include(self, name: str) -> str:
        """Resolve `name` against the current template and compile it."""
        if self.depth >= self.config.max_include_depth:
            raise RenderError(
                f"Can't include template `{name}`: maximum include depth "
                f"({self.config.max_include_depth}) exceeded."
            )
        child = await Template.load(
            name,
            parent=self.template,
            config=self.config,
            resolver=self.template.resolver,
            read=self.template.read,
        )
        log.debug("Including %s at depth %d", child.options.path, self.depth + 1)
        return await child.compile(
            replace(self, template=child, depth=self.depth + 1)
        )


class Template:
    """A parsed template with an optional known source location."""

    def __init__(
        self,
        source: str,
        options: TemplateOptions | None = None,
        config: EngineConfig | None = None,
        resolver: Resolver | None = None,
        read: ReadText | None = None,
    ):
        """Initialize template.

        Args:
            source: Template text.
            options: Per-template options; `options.path` anchors relative
                includes.
            config: Engine settings.
            resolver: Resolver used for includes. Built from `config` if
                not provided.
            read: File reader used for includes. Defaults to `kiwi.fs.read_text`.
        """
        self.source = source
        self.options = options or TemplateOptions()
        self.config = config or EngineConfig()
        self.resolver = resolver or Resolver(self.config)
        self.read = read
        self._tokens: list[BaseToken] | None = None

    def __repr__(self) -> str:
        return f"Template(path={self.options.path!r})"

    @property
    def tokens(self) -> list[BaseToken]:
        if self._tokens is None:
            self._tokens = parse(self.source)
        return self._tokens

    @property
    def encoding(self) -> str:
        return self.options.encoding or self.config.encoding

    @classmethod
    async def load(
        cls,
        name: str,
        parent: Any = None,
        *,
        config: EngineConfig | None = None,
        resolver: Resolver | None = None,
        read: ReadText | None = None,
    ) -> "Template":
        """Resolve `name` relative to `parent` and load it from disk.

        Raises:
            RelativePathError: If `name` is relative and `parent` has no path.
            TemplateNotFoundError: If no candidate file exists.
            OSError: If the resolved file cannot be read.
        """
        config = config or EngineConfig()
        resolver = resolver or Resolver(config)
        path = await resolver.resolve(name, parent)
        options = TemplateOptions(path=path)
        source = await load_template(
            path, encoding=options.encoding or config.encoding, read=read
        )
        return cls(source, options=options, config=config, resolver=resolver, read=read)

    async def compile(self, compiler: Compiler | None = None) -> str:
        """Compile this template's tokens without post-processing."""
        compiler = compiler or Compiler(template=self)
        return await compile_tokens(
            self.tokens, compiler, concurrent=self.config.concurrent_compile
        )

    async def render(
        self,
        variables: Mapping[str, Any] | None = None,
        processors: Sequence[Callable[..., Any]] | None = None,
    ) -> str:
        """Render the template.

        Args:
            variables: Values visible to expressions.
            processors: Post-processors applied in order after compilation.
                Defaults to the built-ins named in `config.processors`.

        Returns:
            Rendered text.
        """
        if processors is None:
            processors = [get_processor(name) for name in self.config.processors]
        compiled = await self.compile(
            Compiler(template=self, variables=dict(variables or {}))
        )
        return await apply_all(compiled, processors)
