"""Error types raised by knit-core combinators.

Every error derives from `KnitError` and from the builtin it refines, so
callers that already catch `TypeError` or `RuntimeError` keep working.
"""

from __future__ import annotations

__all__ = [
    'ComputationFailureError',
    'KnitError',
    'TooManyArgumentsError',
    'TypeMismatchError',
    'UncacheableArgumentsError',
]


class KnitError(Exception):
    """Base class for all knit-core errors."""


# --- Composition Errors ---


class TypeMismatchError(KnitError, TypeError):
    """A pipeline stage rejected the value produced by the previous stage."""

    def __init__(self, position: int, stage: str, value_type: type) -> None:
        self.position = position
        self.stage = stage
        self.value_type = value_type
        super().__init__(f'Stage {position} ({stage}) cannot accept a value of type {value_type.__qualname__}')


# --- Currying Errors ---


class TooManyArgumentsError(KnitError, TypeError):
    """A curried chain received more arguments than it still expects."""

    def __init__(self, name: str, expected: int, received: int) -> None:
        self.name = name
        self.expected = expected
        self.received = received
        super().__init__(f'{name}() expects {expected} more argument(s), got {received}')


# --- Memoization Errors ---


class UncacheableArgumentsError(KnitError, TypeError):
    """Arguments to a memoized function have no stable structural key."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f'Cannot build a cache key for {name}(): {reason}')


class ComputationFailureError(KnitError, RuntimeError):
    """The in-flight computation this caller was waiting on failed.

    The original exception is available as `__cause__`. Nothing was cached,
    so a later call computes again.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'In-flight computation of {name}() failed')
