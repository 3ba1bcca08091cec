"""Async collection combinators.

Runs an async transform over a sequence with structured concurrency (anyio)
and optional concurrency limiting using aiologic for thread-safe operations.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Any

import aiologic
import anyio

__all__ = ['map_async']


async def map_async[T, U](
    sequence: Iterable[T],
    transform: Callable[[T], Awaitable[U]],
    *,
    limit: int | None = None,
) -> tuple[U, ...]:
    """Apply an async transform to every element concurrently.

    Results keep the input order regardless of completion order. If any
    transform raises, the remaining ones are cancelled and the failure
    surfaces from the task group as an ExceptionGroup.

    Note:
        The iterable is eagerly materialized into a tuple before processing.

    Args:
        sequence: The elements to transform. Left untouched.
        transform: Async function applied to each element.
        limit: Maximum number of concurrent transforms. None means unlimited.

    Returns:
        A new tuple whose i-th element is await transform(sequence[i]).

    Example:
        ```python
        async def double(n: int) -> int:
            await anyio.sleep(0.01)
            return n * 2

        async def example():
            assert await map_async([1, 2, 3], double, limit=2) == (2, 4, 6)
        ```
    """
    if limit is not None and limit < 1:
        msg = f'limit must be a positive integer or None, got {limit}'
        raise ValueError(msg)

    items = tuple(sequence)
    results: list[Any] = [None] * len(items)
    limiter = aiologic.CapacityLimiter(limit) if limit is not None else None

    async with anyio.create_task_group() as tg:

        async def run_one(i: int, item: T) -> None:
            if limiter is None:
                results[i] = await transform(item)
                return
            async with limiter:
                results[i] = await transform(item)

        for i, item in enumerate(items):
            tg.start_soon(run_one, i, item)

    return tuple(results)
