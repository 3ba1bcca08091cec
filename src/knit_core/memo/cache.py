"""memoize(): cache a function's results by canonical argument key.

The cache belongs to one memoized function and is filled lazily. Concurrent
callers that miss on the same key share a single computation: the first
caller computes, the others wait for its result. A failing computation is
never cached.

Example:
    ```python
    @memoize
    def fib(n: int) -> int:
        return n if n < 2 else fib(n - 1) + fib(n - 2)

    fib(80)  # computed once per n
    fib.cache_info()  # CacheInfo(hits=78, misses=81, maxsize=None, currsize=81)
    ```
"""

from __future__ import annotations

import hashlib
import threading
from collections import OrderedDict
from collections.abc import Callable
from typing import Any, Final, overload

import msgspec
import wrapt

from knit_core._config import UNSET, _Unset, current_config
from knit_core._logging import get_logger, logging_enabled
from knit_core.errors import ComputationFailureError
from knit_core.memo.keys import make_key

__all__ = ['CacheInfo', 'MemoizedFunction', 'memoize']

_MISSING: Final = object()


def _log(event: str, **fields: Any) -> None:
    if logging_enabled():
        get_logger(__name__).debug(event, **fields)


def _digest(key: bytes) -> str:
    return hashlib.blake2b(key, digest_size=8).hexdigest()


class CacheInfo(msgspec.Struct, frozen=True, gc=False):
    """Snapshot of a memoized function's cache statistics."""

    hits: int
    misses: int
    maxsize: int | None
    currsize: int


class _Flight:
    """One in-progress computation that other callers may wait on."""

    __slots__ = ('done', 'error', 'owner', 'value')

    def __init__(self) -> None:
        self.done = threading.Event()
        self.owner = threading.get_ident()
        self.value: Any = None
        self.error: BaseException | None = None


class _Cache:
    """Result store plus in-flight bookkeeping for one memoized function.

    In unbounded mode cached reads take no lock. The lock guards
    check-then-insert, the in-flight table, and LRU ordering.
    """

    def __init__(self, func: Callable[..., Any], maxsize: int | None) -> None:
        self.func = func
        self.name: str = getattr(func, '__qualname__', None) or repr(func)
        self.maxsize = maxsize
        self.results: dict[bytes, Any] = OrderedDict() if maxsize is not None else {}
        self.inflight: dict[bytes, _Flight] = {}
        self.lock = threading.Lock()
        # Counters are updated without the lock on the lock-free hit path and
        # may be slightly off under contention.
        self.hits = 0
        self.misses = 0

    def call(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        key = make_key(args, kwargs, name=self.name)

        if self.maxsize is None:
            value = self.results.get(key, _MISSING)
            if value is not _MISSING:
                self.hits += 1
                _log('memo.hit', func=self.name, key=_digest(key))
                return value

        with self.lock:
            value = self.results.get(key, _MISSING)
            if value is not _MISSING:
                self.hits += 1
                if self.maxsize is not None:
                    self.results.move_to_end(key)  # type: ignore[attr-defined]
            else:
                flight = self.inflight.get(key)
                leader = flight is None
                if flight is None:
                    flight = self.inflight[key] = _Flight()
                    self.misses += 1

        if value is not _MISSING:
            _log('memo.hit', func=self.name, key=_digest(key))
            return value
        if leader:
            return self._compute(key, flight, args, kwargs)
        return self._wait(flight)

    def _compute(self, key: bytes, flight: _Flight, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        _log('memo.miss', func=self.name, key=_digest(key))
        try:
            value = self.func(*args, **kwargs)
        except BaseException as exc:
            with self.lock:
                del self.inflight[key]
            flight.error = exc
            flight.done.set()
            exc.add_note(f'raised by memoized {self.name}(); the result was not cached')
            _log('memo.failure', func=self.name, key=_digest(key), error=repr(exc))
            raise

        evicted: bytes | None = None
        with self.lock:
            self.results[key] = value
            if self.maxsize is not None and len(self.results) > self.maxsize:
                evicted, _ = self.results.popitem(last=False)  # type: ignore[call-arg]
            del self.inflight[key]
        flight.value = value
        flight.done.set()

        if evicted is not None:
            _log('memo.evict', func=self.name, key=_digest(evicted))
        return value

    def _wait(self, flight: _Flight) -> Any:
        if flight.owner == threading.get_ident():
            msg = f'memoized {self.name}() re-entered while computing the same arguments'
            raise RecursionError(msg)
        flight.done.wait()
        if flight.error is not None:
            raise ComputationFailureError(self.name) from flight.error
        return flight.value

    def info(self) -> CacheInfo:
        with self.lock:
            return CacheInfo(
                hits=self.hits,
                misses=self.misses,
                maxsize=self.maxsize,
                currsize=len(self.results),
            )

    def clear(self) -> None:
        with self.lock:
            self.results.clear()
            self.hits = 0
            self.misses = 0


class MemoizedFunction(wrapt.ObjectProxy):
    """Transparent proxy around a memoized function.

    Attribute access (`__name__`, `__doc__`, ...) reaches the wrapped
    function; calls go through the cache.
    """

    def __init__(self, wrapped: Callable[..., Any], maxsize: int | None) -> None:
        super().__init__(wrapped)
        self._self_cache = _Cache(wrapped, maxsize)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None or not hasattr(type(self.__wrapped__), '__get__'):
            return self
        return _BoundMemoizedFunction(self, instance, owner)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._self_cache.call(args, kwargs)

    def cache_info(self) -> CacheInfo:
        """Return hit/miss counters and the current cache size."""
        return self._self_cache.info()

    def cache_clear(self) -> None:
        """Drop every cached result and reset the counters."""
        self._self_cache.clear()


class _BoundMemoizedFunction(wrapt.ObjectProxy):
    """A memoized method looked up through an instance.

    Proxies the bound method for attribute access. Calls prepend the instance
    and go through the owning MemoizedFunction's cache, so the instance is
    part of the key.
    """

    def __init__(self, parent: MemoizedFunction, instance: Any, owner: type | None) -> None:
        super().__init__(parent.__wrapped__.__get__(instance, owner))
        self._self_parent = parent
        self._self_instance = instance

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._self_parent._self_cache.call((self._self_instance, *args), kwargs)

    def cache_info(self) -> CacheInfo:
        return self._self_parent.cache_info()

    def cache_clear(self) -> None:
        self._self_parent.cache_clear()


def _resolve_maxsize(maxsize: int | None | _Unset) -> int | None:
    if isinstance(maxsize, _Unset):
        return current_config().memo_maxsize
    if maxsize is not None and maxsize < 1:
        msg = f'maxsize must be a positive integer or None, got {maxsize}'
        raise ValueError(msg)
    return maxsize


@overload
def memoize(func: Callable[..., Any], /) -> MemoizedFunction: ...


@overload
def memoize(*, maxsize: int | None = ...) -> Callable[[Callable[..., Any]], MemoizedFunction]: ...


def memoize(
    func: Callable[..., Any] | None = None,
    /,
    *,
    maxsize: int | None | _Unset = UNSET,
) -> MemoizedFunction | Callable[[Callable[..., Any]], MemoizedFunction]:
    """Decorator caching results per canonical argument key.

    Can be used with or without arguments:
        @memoize
        def load(path: str) -> bytes: ...

        @memoize(maxsize=256)
        def render(template: str, context: dict) -> str: ...

    The wrapped function runs at most once per distinct key for the lifetime
    of the memoized instance. Without a maxsize the cache never evicts, so
    unbounded distinct keys mean unbounded memory; pass maxsize (or configure
    memo_maxsize) to enable LRU eviction.

    Args:
        func: The function to wrap (when used without parens).
        maxsize: Maximum number of entries. None means unbounded. Defaults to
            the configured memo_maxsize.

    Returns:
        A MemoizedFunction, or a decorator producing one.

    Raises:
        ValueError: If maxsize is not positive.
    """
    resolved = _resolve_maxsize(maxsize)

    def decorator(target: Callable[..., Any]) -> MemoizedFunction:
        return MemoizedFunction(target, resolved)

    if func is not None:
        return decorator(func)

    return decorator
