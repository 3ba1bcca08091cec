"""async-lru integration for memoized coroutine functions.

Keys are the same canonical argument keys `memoize` uses, so equal-by-value
arguments share one entry. While a key is being computed, every concurrent
awaiter shares the single in-flight task; a failed task is dropped from the
cache, so the next call computes again.

Example:
    ```python
    @memoize_async
    async def fetch_user(user_id: int) -> dict:
        response = await http_client.get(f"/users/{user_id}")
        return response.json()

    # First call fetches, second call uses cache
    user = await fetch_user(1)
    user = await fetch_user(1)
    ```
"""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from typing import Any, overload

from async_lru import alru_cache

from knit_core._config import UNSET, _Unset, current_config
from knit_core._logging import get_logger, logging_enabled
from knit_core.memo.cache import CacheInfo
from knit_core.memo.keys import make_key

__all__ = ['memoize_async']


class _Call:
    """Hashable call record: compares by canonical key, carries the real arguments."""

    __slots__ = ('args', 'key', 'kwargs')

    def __init__(self, key: bytes, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        self.key = key
        self.args = args
        self.kwargs = kwargs

    def __hash__(self) -> int:
        return hash(self.key)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _Call) and self.key == other.key


@overload
def memoize_async[T](
    fn: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]: ...


@overload
def memoize_async[T](
    *,
    maxsize: int | None = ...,
    ttl: float | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]: ...


def memoize_async[T](
    fn: Callable[..., Awaitable[T]] | None = None,
    *,
    maxsize: int | None | _Unset = UNSET,
    ttl: float | None = None,
) -> Callable[..., Awaitable[T]] | Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator memoizing an async function with async-lru.

    Can be used with or without arguments:
        @memoize_async
        async def fetch(id: int) -> Data: ...

        @memoize_async(maxsize=256, ttl=60.0)
        async def fetch(id: int) -> Data: ...

    Args:
        fn: The async function to wrap (when used without parens).
        maxsize: Maximum cache size. None means unlimited. Defaults to the
            configured memo_maxsize.
        ttl: Time-to-live in seconds. None means no expiration.

    Returns:
        The memoized async function, exposing cache_info() and cache_clear().

    Raises:
        ValueError: If maxsize is not positive.
    """
    if isinstance(maxsize, _Unset):
        resolved = current_config().memo_maxsize
    elif maxsize is not None and maxsize < 1:
        msg = f'maxsize must be a positive integer or None, got {maxsize}'
        raise ValueError(msg)
    else:
        resolved = maxsize

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        name: str = getattr(func, '__qualname__', None) or repr(func)

        @alru_cache(maxsize=resolved, ttl=ttl)
        async def cached(call: _Call) -> T:
            if logging_enabled():
                get_logger(__name__).debug('memo.miss', func=name)
            return await func(*call.args, **call.kwargs)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await cached(_Call(make_key(args, kwargs, name=name), args, kwargs))

        def cache_info() -> CacheInfo:
            info = cached.cache_info()
            return CacheInfo(hits=info.hits, misses=info.misses, maxsize=info.maxsize, currsize=info.currsize)

        wrapper.cache_info = cache_info  # type: ignore[attr-defined]
        wrapper.cache_clear = cached.cache_clear  # type: ignore[attr-defined]
        return wrapper

    if fn is not None:
        return decorator(fn)

    return decorator
