"""Collection combinators: map, filter, and reduce over ordered sequences.

The inputs are never mutated and every result is a freshly built tuple
(or, for reduce, whatever the combine function produces).

Example:
    ```python
    from knit_core.seq import filter, map, reduce

    map([1, 2, 3], lambda n: n * 2)  # (2, 4, 6)
    filter([1, 2, 3, 4], lambda n: n % 2 == 0)  # (2, 4)
    reduce([1, 2, 3, 4, 5], lambda acc, n: acc + n, 0)  # 15
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any

import msgspec

__all__ = ['Seq', 'filter', 'map', 'reduce']


def map[T, U](sequence: Iterable[T], transform: Callable[[T], U]) -> tuple[U, ...]:  # noqa: A001
    """Apply transform to every element, preserving order and length.

    Args:
        sequence: The elements to transform. Left untouched.
        transform: Function applied to each element.

    Returns:
        A new tuple whose i-th element is transform(sequence[i]).
    """
    return tuple(transform(item) for item in sequence)


def filter[T](sequence: Iterable[T], predicate: Callable[[T], bool]) -> tuple[T, ...]:  # noqa: A001
    """Keep the elements for which predicate is truthy, in their original order.

    Args:
        sequence: The elements to test. Left untouched.
        predicate: Function deciding whether an element is kept.

    Returns:
        A new tuple, an order-preserving subsequence of the input.
    """
    return tuple(item for item in sequence if predicate(item))


def reduce[T, A](sequence: Iterable[T], combine: Callable[[A, T], A], initial: A) -> A:
    """Fold the elements left to right, starting from initial.

    An empty sequence returns initial without calling combine.

    Args:
        sequence: The elements to fold. Left untouched.
        combine: Function taking the accumulator and the next element.
        initial: The starting accumulator.

    Returns:
        The accumulator after the last element.
    """
    acc = initial
    for item in sequence:
        acc = combine(acc, item)
    return acc


class Seq(msgspec.Struct, frozen=True, gc=False):
    """Fluent, immutable wrapper for chaining collection combinators.

    Every step returns a new Seq over a new tuple, so a Seq can be reused
    and branched freely.

    Example:
        ```python
        Seq.of([1, 2, 3]).map(lambda n: n * 2).filter(lambda n: n > 3).to_list()  # [4, 6]
        Seq.of([1, 2, 3]).map(lambda n: n * 2).reduce(lambda a, n: a + n, 0)  # 12
        ```
    """

    items: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if type(self.items) is not tuple:
            msgspec.structs.force_setattr(self, 'items', tuple(self.items))

    @classmethod
    def of(cls, iterable: Iterable[Any]) -> Seq:
        """Build a Seq from any iterable (materialized once)."""
        return cls(items=iterable)

    def map(self, transform: Callable[[Any], Any]) -> Seq:
        """Apply transform to each element."""
        return Seq(items=map(self.items, transform))

    def filter(self, predicate: Callable[[Any], bool]) -> Seq:
        """Keep elements where predicate is truthy."""
        return Seq(items=filter(self.items, predicate))

    def reduce(self, combine: Callable[[Any, Any], Any], initial: Any) -> Any:
        """Fold the elements left to right."""
        return reduce(self.items, combine, initial)

    def take(self, n: int) -> Seq:
        """First n elements."""
        return Seq(items=self.items[:n])

    def skip(self, n: int) -> Seq:
        """Everything after the first n elements."""
        return Seq(items=self.items[n:])

    # =========================================================================
    # Terminal operations
    # =========================================================================

    def to_list(self) -> list[Any]:
        """Collect into a new list."""
        return list(self.items)

    def to_tuple(self) -> tuple[Any, ...]:
        """Return the underlying tuple."""
        return self.items

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
