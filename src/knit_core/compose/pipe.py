"""pipe() and compose(): build unary pipelines out of plain functions."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, TypeVar, overload

import msgspec

from knit_core.errors import KnitError, TypeMismatchError

__all__ = [
    'AsyncPipeline',
    'Pipeline',
    'compose',
    'identity',
    'pipe',
    'pipe_async',
    'pipe_value',
]

T = TypeVar('T')
T1 = TypeVar('T1')
T2 = TypeVar('T2')
T3 = TypeVar('T3')
T4 = TypeVar('T4')
T5 = TypeVar('T5')
T6 = TypeVar('T6')

_PACKAGE = __name__.partition('.')[0]


def identity[T](value: T) -> T:
    """Return the value unchanged."""
    return value


def _stage_name(stage: Callable[..., Any]) -> str:
    return getattr(stage, '__qualname__', None) or repr(stage)


def _check_stages(fns: tuple[Any, ...], caller: str) -> tuple[Callable[..., Any], ...]:
    for position, stage in enumerate(fns):
        if not callable(stage):
            msg = f'{caller}() stage {position} is not callable: {stage!r}'
            raise TypeError(msg)
    return fns


def _in_package(module: str) -> bool:
    return module == _PACKAGE or module.startswith(_PACKAGE + '.')


def _raised_by_stage(exc: BaseException) -> bool:
    """True when the TypeError came from the call boundary or the stage's own frame.

    Frames of this package (pipelines, partials, curried and memoized wrappers)
    are not counted. Deeper frames mean a bug inside the stage, which
    propagates untouched.
    """
    if isinstance(exc, KnitError):
        return False
    depth = 0
    tb = exc.__traceback__
    while tb is not None:
        if not _in_package(tb.tb_frame.f_globals.get('__name__', '')):
            depth += 1
        tb = tb.tb_next
    return depth <= 1


def _as_tuple(stages: Any) -> tuple[Callable[..., Any], ...]:
    return stages if type(stages) is tuple else tuple(stages)


class Pipeline(msgspec.Struct, frozen=True, gc=False):
    """A frozen, callable sequence of unary stages applied left to right.

    An empty pipeline is the identity. Pipelines are values: `|` and `then()`
    return new pipelines and never modify the receiver.

    Example:
        ```python
        inc_then_double = Pipeline(stages=(lambda x: x + 1,)) | (lambda x: x * 2)
        inc_then_double(5)  # 12
        ```
    """

    stages: tuple[Callable[[Any], Any], ...] = ()

    def __post_init__(self) -> None:
        msgspec.structs.force_setattr(self, 'stages', _as_tuple(self.stages))

    def __call__(self, value: Any) -> Any:
        """Thread the value through every stage."""
        current = value
        for position, stage in enumerate(self.stages):
            try:
                current = stage(current)
            except TypeError as exc:
                if not _raised_by_stage(exc):
                    raise
                raise TypeMismatchError(position, _stage_name(stage), type(current)) from exc
        return current

    def then(self, *fns: Callable[[Any], Any]) -> Pipeline:
        """Return a new pipeline with the given stages appended."""
        return Pipeline(stages=(*self.stages, *_check_stages(fns, 'then')))

    def __or__(self, fn: Callable[[Any], Any]) -> Pipeline:
        """Pipe operator: `pipeline | f` appends f as the last stage."""
        return self.then(fn)


class AsyncPipeline(msgspec.Struct, frozen=True, gc=False):
    """Async counterpart of Pipeline: stages may be sync or async callables."""

    stages: tuple[Callable[[Any], Any], ...] = ()

    def __post_init__(self) -> None:
        msgspec.structs.force_setattr(self, 'stages', _as_tuple(self.stages))

    async def __call__(self, value: Any) -> Any:
        """Thread the value through every stage, awaiting awaitable results."""
        current = value
        for position, stage in enumerate(self.stages):
            received = current
            try:
                current = stage(current)
            except TypeError as exc:
                if not _raised_by_stage(exc):
                    raise
                raise TypeMismatchError(position, _stage_name(stage), type(current)) from exc
            if inspect.isawaitable(current):
                try:
                    current = await current
                except TypeError as exc:
                    if not _raised_by_stage(exc):
                        raise
                    raise TypeMismatchError(position, _stage_name(stage), type(received)) from exc
        return current

    def then(self, *fns: Callable[[Any], Any]) -> AsyncPipeline:
        """Return a new async pipeline with the given stages appended."""
        return AsyncPipeline(stages=(*self.stages, *_check_stages(fns, 'then')))

    def __or__(self, fn: Callable[[Any], Any]) -> AsyncPipeline:
        return self.then(fn)


# Overloads for type inference (up to 6 functions)
@overload
def pipe() -> Callable[[T], T]: ...
@overload
def pipe(fn1: Callable[[T], T1], /) -> Callable[[T], T1]: ...
@overload
def pipe(fn1: Callable[[T], T1], fn2: Callable[[T1], T2], /) -> Callable[[T], T2]: ...
@overload
def pipe(fn1: Callable[[T], T1], fn2: Callable[[T1], T2], fn3: Callable[[T2], T3], /) -> Callable[[T], T3]: ...
@overload
def pipe(
    fn1: Callable[[T], T1],
    fn2: Callable[[T1], T2],
    fn3: Callable[[T2], T3],
    fn4: Callable[[T3], T4],
    /,
) -> Callable[[T], T4]: ...
@overload
def pipe(
    fn1: Callable[[T], T1],
    fn2: Callable[[T1], T2],
    fn3: Callable[[T2], T3],
    fn4: Callable[[T3], T4],
    fn5: Callable[[T4], T5],
    /,
) -> Callable[[T], T5]: ...
@overload
def pipe(
    fn1: Callable[[T], T1],
    fn2: Callable[[T1], T2],
    fn3: Callable[[T2], T3],
    fn4: Callable[[T3], T4],
    fn5: Callable[[T4], T5],
    fn6: Callable[[T5], T6],
    /,
) -> Callable[[T], T6]: ...
@overload
def pipe(*fns: Callable[[Any], Any]) -> Callable[[Any], Any]: ...


def pipe(*fns: Callable[[Any], Any]) -> Pipeline:
    """Compose functions left to right.

    `pipe(f, g, h)(x) == h(g(f(x)))`. With no functions the result is the
    identity; with one it behaves exactly like that function.

    Args:
        *fns: Unary functions, each accepting the previous one's output.

    Returns:
        A Pipeline applying the functions in order.

    Raises:
        TypeError: If any stage is not callable.

    Example:
        ```python
        pipe(lambda x: x + 1, lambda x: x * 2)(5)
        # 12

        pipe()(42)
        # 42
        ```
    """
    return Pipeline(stages=_check_stages(fns, 'pipe'))


def compose(*fns: Callable[[Any], Any]) -> Pipeline:
    """Compose functions right to left.

    `compose(f, g, h)(x) == f(g(h(x)))`, the mathematical order.

    Example:
        ```python
        compose(str, lambda x: x * 2)(21)
        # '42'
        ```
    """
    return Pipeline(stages=_check_stages(fns, 'compose')[::-1])


def pipe_value(value: Any, *fns: Callable[[Any], Any]) -> Any:
    """Thread a value through the functions right away.

    Example:
        ```python
        pipe_value(5, lambda x: x + 1, str)
        # '6'
        ```
    """
    return pipe(*fns)(value)


def pipe_async(*fns: Callable[[Any], Any]) -> AsyncPipeline:
    """Compose sync and async functions left to right into an async callable.

    Example:
        ```python
        async def fetch_name(user_id: int) -> str:
            return f"user-{user_id}"

        await pipe_async(fetch_name, str.upper)(7)
        # 'USER-7'
        ```
    """
    return AsyncPipeline(stages=_check_stages(fns, 'pipe_async'))
