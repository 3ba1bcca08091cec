"""Maybe type: Present[T] | Absent for values that may be missing.

Example:
    ```python
    from knit_core.maybe import Absent, Present, maybe

    Present(5).map(lambda n: n * 2).get_or_else(0)  # 10
    Absent.map(lambda n: n * 2).get_or_else(0)  # 0

    maybe({"name": "Ada"}.get("email"))  # Absent
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import NoReturn, TypeIs

import msgspec

__all__ = ['Absent', 'AbsentType', 'Maybe', 'Present', 'maybe']


class Present[T](msgspec.Struct, frozen=True, gc=False):
    """Present variant of Maybe containing a value of type T.

    Examples:
        >>> Present(42).get_or_else(0)
        42
        >>> Present(42).map(lambda x: x * 2)
        Present(value=84)
    """

    value: T

    def is_present(self) -> TypeIs[Present[T]]:
        """Return True since this is Present."""
        return True

    def is_absent(self) -> TypeIs[AbsentType]:
        """Return False since this is Present."""
        return False

    def get_or_else(self, default: T) -> T:  # noqa: ARG002
        """Return the contained value, ignoring the default."""
        return self.value

    def get_or_else_get(self, f: Callable[[], T]) -> T:  # noqa: ARG002
        """Return the contained value without calling the fallback."""
        return self.value

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Present[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the value.

        Returns:
            A new Present holding f(value).
        """
        return Present(f(self.value))

    def and_then[U](self, f: Callable[[T], Present[U] | AbsentType]) -> Present[U] | AbsentType:
        """Apply a function that itself returns a Maybe.

        Also known as flatmap or bind.
        """
        return f(self.value)

    def filter(self, predicate: Callable[[T], bool]) -> Present[T] | AbsentType:
        """Keep the value only if predicate holds, else Absent."""
        if predicate(self.value):
            return self
        return Absent

    def or_else(self, _f: Callable[[], Present[T] | AbsentType]) -> Present[T]:
        """Return self unchanged since this is Present."""
        return self

    def __or__[U](self, f: Callable[[T], U]) -> Present[U]:
        """Pipe operator: `Present(x) | f` is `Present(x).map(f)`."""
        return self.map(f)


class AbsentType(msgspec.Struct, frozen=True, gc=False):
    """Absent variant of Maybe representing a missing value.

    This is a singleton in practice - use the `Absent` constant instead of
    instantiating directly. Operations on Absent never call the functions
    they are given (except the fallbacks of or_else and get_or_else_get).

    Examples:
        >>> Absent.is_absent()
        True
        >>> Absent.get_or_else(0)
        0
    """

    def is_present(self) -> TypeIs[Present[object]]:
        """Return False since this is Absent."""
        return False

    def is_absent(self) -> TypeIs[AbsentType]:
        """Return True since this is Absent."""
        return True

    def get_or_else[T](self, default: T) -> T:
        """Return the default value."""
        return default

    def get_or_else_get[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default value."""
        return f()

    def unwrap(self) -> NoReturn:
        """Raise since there is no value.

        Raises:
            ValueError: Always.
        """
        msg = 'Called unwrap on Absent'
        raise ValueError(msg)

    def map[T, U](self, _f: Callable[[T], U]) -> AbsentType:
        """Return Absent without calling the function."""
        return self

    def and_then[T, U](self, _f: Callable[[T], Present[U] | AbsentType]) -> AbsentType:
        """Return Absent without calling the function."""
        return self

    def filter[T](self, _predicate: Callable[[T], bool]) -> AbsentType:
        """Return Absent without calling the predicate."""
        return self

    def or_else[T](self, f: Callable[[], Present[T] | AbsentType]) -> Present[T] | AbsentType:
        """Return the Maybe produced by the recovery function."""
        return f()

    def __or__[T, U](self, _f: Callable[[T], U]) -> AbsentType:
        """Pipe operator returns Absent unchanged."""
        return self

    def __repr__(self) -> str:
        return 'Absent'


Absent: AbsentType = AbsentType()
"""Singleton instance representing a missing value."""


type Maybe[T] = Present[T] | AbsentType


def maybe[T](value: T | None) -> Maybe[T]:
    """Wrap a possibly-missing value: None becomes Absent, anything else Present.

    Example:
        ```python
        maybe(0)  # Present(value=0)
        maybe(None)  # Absent
        ```
    """
    if value is None:
        return Absent
    return Present(value)
