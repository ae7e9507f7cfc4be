"""Compiler - compiles an ordered token sequence into output text.

Each token exposes `compile(compiler)`, returning its fragment or an
awaitable of it. Fragments are stored at their token's index, so the output
follows input order even when compiles finish out of order.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Sequence

log = logging.getLogger(__name__)


async def _compile_one(token: Any, compiler: Any) -> str:
    fragment = token.compile(compiler)
    if inspect.isawaitable(fragment):
        fragment = await fragment
    return fragment


async def _compile_concurrently(
    tokens: Sequence[Any], compiler: Any, slots: list[str | None]
) -> None:
    tasks = [asyncio.ensure_future(_compile_one(t, compiler)) for t in tokens]
    index_of = {task: index for index, task in enumerate(tasks)}
    pending = set(tasks)

    try:
        while pending:
            done, pending = await asyncio.wait(
                pending, return_when=asyncio.FIRST_EXCEPTION
            )
            error: BaseException | None = None
            for task in sorted(done, key=index_of.__getitem__):
                exc = task.exception()
                if exc is None:
                    slots[index_of[task]] = task.result()
                elif error is None:
                    error = exc
            if error is not None:
                raise error
    finally:
        if pending:
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)


async def compile_token_array(
    tokens: Sequence[Any], compiler: Any, *, concurrent: bool = False
) -> list[str]:
    """Compile `tokens` with the shared `compiler` context.

    Args:
        tokens: Ordered tokens.
        compiler: Context passed to every token. Never mutated here.
        concurrent: Run all compiles at once instead of one after another.

    Returns:
        Compiled fragments, in the order of `tokens`.

    Raises:
        Exception: The first error raised by a token. Partial results are
            discarded and, in concurrent mode, outstanding compiles are
            cancelled.
    """
    tokens = list(tokens)
    slots: list[str | None] = [None] * len(tokens)

    if concurrent:
        await _compile_concurrently(tokens, compiler, slots)
    else:
        for index, token in enumerate(tokens):
            slots[index] = await _compile_one(token, compiler)

    log.debug("Compiled %d tokens (concurrent=%s)", len(tokens), concurrent)
    return slots  # type: ignore[return-value]


async def compile_tokens(
    tokens: Sequence[Any], compiler: Any, *, concurrent: bool = False
) -> str:
    """Compile `tokens` and glue the fragments together with no separator."""
    compiled = await compile_token_array(tokens, compiler, concurrent=concurrent)
    return "".join(compiled)
