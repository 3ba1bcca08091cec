"""Async support: memoized coroutine functions and concurrent map."""

from knit_core.async_.cache import memoize_async
from knit_core.async_.itertools import map_async

__all__ = [
    'map_async',
    'memoize_async',
]
