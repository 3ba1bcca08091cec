"""Canonical cache keys for memoized calls.

Arguments are first rewritten into a type-tagged form and then serialized with
a deterministic msgpack encoder, so argument lists that are equal by value
produce identical bytes no matter which objects carry them, while values of
different types never collide. Every container and every non-builtin value
becomes a `[type name, payload]` pair; only exact `None`, `bool`, `int`,
`float`, `str` and `bytes` are encoded bare, since msgpack already keeps those
apart. Dict entries and set members are sorted by their encoded bytes, and
keyword argument order is irrelevant.

Keys are stricter than `==`: `1`, `1.0` and `True` compare equal in Python but
get different keys, as do `0.0` and `-0.0`. This only ever costs an extra
computation, never a wrong result.

Supported payloads:
    - builtin containers and their subclasses (list, tuple, set, frozenset, dict)
    - Enum members (by name), dataclasses and msgspec Structs (by field values)
    - datetime, date, time, timedelta, Decimal and UUID
    - integers of any size (outside the msgpack range they are tagged strings)
    - other non-callable objects with a `__dict__` (by instance attributes)

Callables, objects without a `__dict__`, and cyclic structures are rejected.
"""

from __future__ import annotations

import dataclasses
import datetime
import enum
import uuid
from decimal import Decimal
from typing import Any

import msgspec

from knit_core.errors import UncacheableArgumentsError

__all__ = ['make_key']

_BARE = (type(None), bool, int, float, str, bytes)
_NATIVE = (datetime.datetime, datetime.date, datetime.time, datetime.timedelta, Decimal, uuid.UUID)
_INT_MIN = -(2**63)
_INT_MAX = 2**64 - 1

_encoder = msgspec.msgpack.Encoder(order='deterministic')


def _type_name(cls: type) -> str:
    return f'{cls.__module__}.{cls.__qualname__}'


def _sorted_encoded(items: list[Any]) -> list[Any]:
    return sorted(items, key=_encoder.encode)


def _canonical(obj: Any, active: set[int]) -> Any:
    """Rewrite obj into a msgpack-encodable value that records its type."""
    cls = type(obj)
    if cls in _BARE:
        if cls is int and not _INT_MIN <= obj <= _INT_MAX:
            return [_type_name(int), str(obj)]
        return obj

    name = _type_name(cls)
    if isinstance(obj, enum.Enum):
        return [name, obj.name]
    if isinstance(obj, _NATIVE):
        return [name, obj]
    if isinstance(obj, int):
        return [name, _canonical(int(obj), active)]
    if isinstance(obj, float):
        return [name, float(obj)]
    if isinstance(obj, str):
        return [name, str.__str__(obj)]
    if isinstance(obj, bytes | bytearray | memoryview):
        return [name, bytes(obj)]
    if callable(obj):
        msg = f'callables such as {cls.__qualname__} have no structural encoding'
        raise TypeError(msg)

    marker = id(obj)
    if marker in active:
        msg = f'cyclic reference through {cls.__qualname__}'
        raise TypeError(msg)
    active.add(marker)
    try:
        if isinstance(obj, list | tuple):
            return [name, [_canonical(item, active) for item in obj]]
        if isinstance(obj, set | frozenset):
            return [name, _sorted_encoded([_canonical(item, active) for item in obj])]
        if isinstance(obj, dict):
            pairs = [[_canonical(k, active), _canonical(v, active)] for k, v in obj.items()]
            return [name, sorted(pairs, key=lambda pair: _encoder.encode(pair[0]))]
        if isinstance(obj, msgspec.Struct):
            return [name, _canonical(msgspec.structs.asdict(obj), active)]
        if dataclasses.is_dataclass(obj):
            fields = {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
            return [name, _canonical(fields, active)]
        if hasattr(obj, '__dict__'):
            return [name, _canonical(vars(obj), active)]
    finally:
        active.discard(marker)

    msg = f'objects of type {cls.__qualname__} have no structural encoding'
    raise TypeError(msg)


def make_key(args: tuple[Any, ...], kwargs: dict[str, Any], *, name: str = '<function>') -> bytes:
    """Build the canonical key for one call.

    Args:
        args: Positional arguments of the call.
        kwargs: Keyword arguments of the call.
        name: Function name used in error messages.

    Returns:
        The canonical key bytes.

    Raises:
        UncacheableArgumentsError: If the arguments cannot be encoded.

    Example:
        ```python
        make_key((1, {"b": 2, "a": 1}), {}) == make_key((1, {"a": 1, "b": 2}), {})
        # True
        make_key(([1, 2],), {}) == make_key(((1, 2),), {})
        # False
        ```
    """
    active: set[int] = set()
    try:
        positional = [_canonical(arg, active) for arg in args]
        keywords = sorted([key, _canonical(value, active)] for key, value in kwargs.items())
        return _encoder.encode([positional, keywords])
    except RecursionError as exc:
        raise UncacheableArgumentsError(name, 'arguments are nested too deeply') from exc
    except (TypeError, ValueError, OverflowError) as exc:
        raise UncacheableArgumentsError(name, str(exc)) from exc
