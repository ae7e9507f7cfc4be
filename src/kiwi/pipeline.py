"""Pipeline - async composition of processors over a value.

A processor is any callable `processor(value, *args)` returning either the
new value or an awaitable of it. Errors are raised, never returned, and
surface to the caller as the very exception the processor raised.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Iterable, Sequence

log = logging.getLogger(__name__)

Processor = Callable[..., Any]


def _processor_name(processor: Processor) -> str:
    return getattr(processor, "__name__", type(processor).__name__)


async def apply(
    value: Any, processor: Processor, args: Sequence[Any] | None = ()
) -> Any:
    """Apply one processor to `value`.

    Args:
        value: Input passed as the first positional argument.
        processor: Sync or async callable.
        args: Extra positional arguments appended after `value`.

    Returns:
        The processor's result, unchanged.
    """
    result = processor(value, *(args or ()))
    if inspect.isawaitable(result):
        result = await result
    return result


async def apply_all(
    value: Any, processors: Iterable[Processor], args: Sequence[Any] | None = ()
) -> Any:
    """Thread `value` through `processors` in order.

    Each processor starts only after the previous one has finished, and
    receives its result. The first failure stops the chain; later
    processors are never called.

    Args:
        value: Initial input.
        processors: Ordered processors.
        args: Extra positional arguments passed to every processor.

    Returns:
        Output of the last processor, or `value` if there are none.
    """
    args = tuple(args or ())
    for processor in processors:
        log.debug("Applying processor %s", _processor_name(processor))
        value = await apply(value, processor, args)
    return value


async def apply_each(
    value: Any, processors: Iterable[Processor], args: Sequence[Any] | None = ()
) -> list[Any]:
    """Apply every processor to the same `value` concurrently.

    Results are returned in processor order. The first failure is raised and
    the remaining processors are cancelled.
    """
    args = tuple(args or ())
    tasks = [asyncio.ensure_future(apply(value, p, args)) for p in processors]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
