"""knit-core: small functional-composition toolkit for Python 3.13+.

Composition, collection combinators, currying and partial application,
memoization, and a Maybe container, with async variants where they matter.

Flat imports (preferred):
    from knit_core import pipe, compose, curry, partial, memoize
    from knit_core import Present, Absent, Maybe, maybe

Submodule imports (for organization):
    from knit_core.compose import pipe, compose, Pipeline
    from knit_core.seq import map, filter, reduce, Seq
    from knit_core.fn import curry, partial
    from knit_core.memo import memoize, make_key
    from knit_core.maybe import Present, Absent
"""

from knit_core import seq

# Configuration
from knit_core._config import KnitConfig, current_config, get_config, init

# Async
from knit_core.async_ import map_async, memoize_async

# Composition
from knit_core.compose import (
    AsyncPipeline,
    Pipeline,
    compose,
    identity,
    pipe,
    pipe_async,
    pipe_value,
)

# Errors
from knit_core.errors import (
    ComputationFailureError,
    KnitError,
    TooManyArgumentsError,
    TypeMismatchError,
    UncacheableArgumentsError,
)

# Currying
from knit_core.fn import Curried, Partial, curry, partial

# Maybe
from knit_core.maybe import Absent, AbsentType, Maybe, Present, maybe

# Memoization
from knit_core.memo import CacheInfo, MemoizedFunction, make_key, memoize

# Collections
from knit_core.seq import Seq
from knit_core.seq import filter as filter_seq
from knit_core.seq import map as map_seq
from knit_core.seq import reduce as reduce_seq

__all__ = [
    # Maybe
    'Absent',
    'AbsentType',
    # Composition
    'AsyncPipeline',
    # Memoization
    'CacheInfo',
    # Errors
    'ComputationFailureError',
    # Currying
    'Curried',
    # Configuration
    'KnitConfig',
    'KnitError',
    'Maybe',
    'MemoizedFunction',
    'Partial',
    'Pipeline',
    'Present',
    # Collections
    'Seq',
    'TooManyArgumentsError',
    'TypeMismatchError',
    'UncacheableArgumentsError',
    'compose',
    'current_config',
    'curry',
    'filter_seq',
    'get_config',
    'identity',
    'init',
    'make_key',
    'map_async',
    'map_seq',
    'maybe',
    'memoize',
    'memoize_async',
    'partial',
    'pipe',
    'pipe_async',
    'pipe_value',
    'reduce_seq',
    'seq',
]
