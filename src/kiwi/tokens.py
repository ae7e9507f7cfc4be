"""Tokens produced by the parser.

Every token compiles itself against a compiler context: an object exposing
`variables` (mapping) and `include(name)` (coroutine returning text).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from jinja2 import Environment, TemplateError

from kiwi.exceptions import RenderError, TokenCompileError

_expressions = Environment(autoescape=False)


class BaseToken(ABC):
    """A unit of parsed template content."""

    # Compared by value; mutable, so not hashable.
    __hash__ = None  # type: ignore[assignment]

    @abstractmethod
    async def compile(self, compiler: Any) -> str:
        """Return this token's compiled fragment."""

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and vars(self) == vars(other)

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({fields})"


class TextToken(BaseToken):
    """Literal text, emitted unchanged."""

    def __init__(self, text: str):
        self.text = text

    async def compile(self, compiler: Any) -> str:
        return self.text


class ExpressionToken(BaseToken):
    """`{{ expr }}` - a Jinja expression evaluated against the variables.

    `None` and undefined names render as the empty string.
    """

    def __init__(self, source: str):
        self.source = source

    async def compile(self, compiler: Any) -> str:
        try:
            expr = _expressions.compile_expression(
                self.source, undefined_to_none=True
            )
            value = expr(**dict(compiler.variables))
        except TemplateError as exc:
            raise TokenCompileError(self, str(exc)) from exc
        except (
            ArithmeticError, AttributeError, LookupError, TypeError, ValueError
        ) as exc:
            raise TokenCompileError(self, f"{type(exc).__name__}: {exc}") from exc
        return "" if value is None else str(value)


class IncludeToken(BaseToken):
    """`{% include "name" %}` - renders another template in place.

    The name is resolved relative to the including template.
    """

    def __init__(self, name: str):
        self.name = name

    async def compile(self, compiler: Any) -> str:
        if not self.name:
            raise RenderError("Include tag requires a template name.")
        return await compiler.include(self.name)
