"""partial(): fix a prefix of a function's arguments."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import msgspec

__all__ = ['Partial', 'partial']


class Partial(msgspec.Struct, frozen=True, gc=False):
    """A function with some leading positional and keyword arguments fixed.

    Unlike Curried, a Partial accepts any number of remaining arguments and
    calls the function immediately. Fixed keyword arguments are kept as a
    tuple of (name, value) pairs, so a Partial over hashable values is hashable.
    """

    func: Callable[..., Any]
    args: tuple[Any, ...] = ()
    kwargs: tuple[tuple[str, Any], ...] = ()

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Call func with the fixed prefix followed by the given arguments.

        Call-time keyword arguments override fixed ones.
        """
        return self.func(*self.args, *args, **{**dict(self.kwargs), **kwargs})


def partial(func: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Partial:
    """Fix leading arguments of func.

    Args:
        func: The function to apply partially.
        *args: Positional prefix to fix.
        **kwargs: Keyword arguments to fix.

    Returns:
        A Partial awaiting the remaining arguments.

    Example:
        ```python
        def multiply(a: int, b: int) -> int:
            return a * b

        partial(multiply, 5)(10)  # 50
        ```
    """
    if not callable(func):
        msg = f'partial() expects a callable, got {func!r}'
        raise TypeError(msg)
    return Partial(func=func, args=tuple(args), kwargs=tuple(kwargs.items()))
