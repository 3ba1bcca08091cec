"""Memoization: per-function result caches keyed by canonical arguments."""

from knit_core.memo.cache import CacheInfo, MemoizedFunction, memoize
from knit_core.memo.keys import make_key

__all__ = [
    'CacheInfo',
    'MemoizedFunction',
    'make_key',
    'memoize',
]
