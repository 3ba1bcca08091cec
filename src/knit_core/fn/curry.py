"""curry(): turn an N-argument function into a chain of calls.

A curried function keeps collecting positional arguments, one or more per
call, until it has exactly N of them; then it calls the original function.

Example:
    ```python
    from knit_core.fn import curry

    @curry
    def add3(a: int, b: int, c: int) -> int:
        return a + b + c

    add3(1)(2)(3)  # 6
    add3(1, 2)(3)  # 6
    add_one = add3(1)  # Curried, reusable
    add_one(10)(20)  # 31
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, overload

import msgspec

from knit_core.errors import TooManyArgumentsError

__all__ = ['Curried', 'curry']

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _name_of(func: Callable[..., Any]) -> str:
    return getattr(func, '__qualname__', None) or repr(func)


def _infer_arity(func: Callable[..., Any]) -> int:
    """Count the required positional parameters of func."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError) as exc:
        msg = f'Cannot inspect the signature of {_name_of(func)}; pass arity= explicitly'
        raise TypeError(msg) from exc

    required = 0
    variadic = False
    for param in signature.parameters.values():
        if param.kind in _POSITIONAL and param.default is inspect.Parameter.empty:
            required += 1
        elif param.kind is inspect.Parameter.VAR_POSITIONAL:
            variadic = True

    if variadic and required == 0:
        msg = f'{_name_of(func)} only takes *args; pass arity= explicitly'
        raise TypeError(msg)
    return required


class Curried(msgspec.Struct, frozen=True, gc=False):
    """A partially applied step of a curried function.

    Attributes:
        func: The original function.
        arity: Total number of positional arguments func receives.
        args: Arguments collected so far (never longer than arity).
    """

    func: Callable[..., Any]
    arity: int
    args: tuple[Any, ...] = ()

    @property
    def remaining(self) -> int:
        """Number of arguments still expected."""
        return self.arity - len(self.args)

    def __call__(self, *args: Any) -> Any:
        """Supply the next argument(s).

        Returns:
            The result of func once all arguments are collected, otherwise a
            new Curried awaiting the rest.

        Raises:
            TypeError: If called with no arguments while some are still expected.
            TooManyArgumentsError: If more arguments are given than remain.
        """
        remaining = self.remaining
        if not args and remaining > 0:
            msg = f'curried {_name_of(self.func)}() expects at least one argument'
            raise TypeError(msg)
        if len(args) > remaining:
            raise TooManyArgumentsError(_name_of(self.func), remaining, len(args))

        collected = (*self.args, *args)
        if len(collected) == self.arity:
            return self.func(*collected)
        return Curried(func=self.func, arity=self.arity, args=collected)

    def __repr__(self) -> str:
        applied = ''.join(f'({arg!r})' for arg in self.args)
        return f'curry({_name_of(self.func)}){applied}'


@overload
def curry(func: Callable[..., Any], /, *, arity: int | None = None) -> Curried: ...


@overload
def curry(*, arity: int | None = None) -> Callable[[Callable[..., Any]], Curried]: ...


def curry(
    func: Callable[..., Any] | None = None,
    /,
    *,
    arity: int | None = None,
) -> Curried | Callable[[Callable[..., Any]], Curried]:
    """Curry a function of fixed arity.

    Can be used with or without arguments:
        @curry
        def add(a, b): ...

        @curry(arity=3)
        def join(*parts): ...

    Args:
        func: The function to curry (when used without parens).
        arity: Number of positional arguments to collect. Inferred from the
            required positional parameters when None.

    Returns:
        A Curried chain, or a decorator producing one.

    Raises:
        TypeError: If the arity cannot be inferred or is negative.
    """

    def decorator(target: Callable[..., Any]) -> Curried:
        if isinstance(target, Curried) and arity is None:
            return target
        resolved = _infer_arity(target) if arity is None else arity
        if resolved < 0:
            msg = f'arity must be non-negative, got {resolved}'
            raise TypeError(msg)
        return Curried(func=target, arity=resolved)

    if func is not None:
        return decorator(func)

    return decorator
