"""Parser - splits template source into tokens.

Supported syntax:
- {{ expr }}            expression
- {% include "name" %}  include another template
- {# ... #}             comment, dropped
Everything else is literal text.
"""

from __future__ import annotations

import re

from kiwi.exceptions import RenderError
from kiwi.tokens import BaseToken, ExpressionToken, IncludeToken, TextToken

TAG_PATTERN = re.compile(r"(\{\{.*?\}\}|\{%.*?%\}|\{#.*?#\})", re.DOTALL)
INCLUDE_PATTERN = re.compile(r"""^include\s+(['"])(.*?)\1$""")


def _parse_tag(body: str) -> BaseToken:
    match = INCLUDE_PATTERN.match(body)
    if match:
        return IncludeToken(match.group(2))
    tag = body.split(None, 1)[0] if body else ""
    raise RenderError(f"Unknown tag `{tag}` in `{{% {body} %}}`.")


def parse(source: str) -> list[BaseToken]:
    """Parse `source` into an ordered list of tokens.

    Raises:
        RenderError: On an unknown or malformed `{% %}` tag.
    """
    tokens: list[BaseToken] = []

    for part in TAG_PATTERN.split(source):
        if not part:
            continue
        if part.startswith("{{") and part.endswith("}}"):
            tokens.append(ExpressionToken(part[2:-2].strip()))
        elif part.startswith("{%") and part.endswith("%}"):
            tokens.append(_parse_tag(part[2:-2].strip()))
        elif part.startswith("{#") and part.endswith("#}"):
            continue
        else:
            tokens.append(TextToken(part))

    return tokens
