"""Structural introspection and deep equality for argument values.

Two values are structurally equal when their *data* matches, regardless of
the classes that hold it: ``Point(x=1)`` and ``Vector(x=1)`` compare equal,
and so do ``[1, 2]`` and ``(1, 2)``.
"""

from __future__ import annotations

import enum
import math
import numbers
import types
import typing as t
from collections.abc import Mapping, Set

#: Classes setting this attribute to ``True`` never expose their instance data.
OPAQUE_ATTR = "__safe_mock_opaque__"

_ATOMIC_TYPES: tuple[type, ...] = (str, bytes, bytearray, type(None))

_NON_DATA_TYPES: tuple[type, ...] = (
    *_ATOMIC_TYPES,
    numbers.Number,
    enum.Enum,
    type,
    Mapping,
    list,
    tuple,
    Set,
    types.FunctionType,
    types.MethodType,
    types.BuiltinFunctionType,
    types.ModuleType,
)

_Visited = set[tuple[int, int]]


def _slot_names(cls: type) -> t.Iterator[str]:
    for klass in cls.__mro__:
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ("__dict__", "__weakref__"):
                yield name


def own_data(value: object) -> dict[str, t.Any] | None:
    """Return the instance data held by *value*, or ``None`` if it has none.

    Data comes from the instance ``__dict__`` plus any populated
    ``__slots__``. Atomic values, containers, enum members, classes,
    routines and opaque objects are never treated as data holders.
    """
    if isinstance(value, _NON_DATA_TYPES):
        return None
    if getattr(type(value), OPAQUE_ATTR, False):
        return None
    data: dict[str, t.Any] = {}
    found = False
    try:
        instance_dict = object.__getattribute__(value, "__dict__")
    except AttributeError:
        pass
    else:
        found = True
        data.update(instance_dict)
    for name in _slot_names(type(value)):
        found = True
        try:
            data[name] = object.__getattribute__(value, name)
        except AttributeError:
            continue
    return data if found else None


def _has_custom_eq(cls: type) -> bool:
    return cls.__eq__ is not object.__eq__


def _is_nan(value: object) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _as_mapping(value: object) -> Mapping[t.Any, t.Any] | None:
    if isinstance(value, Mapping):
        return value
    return own_data(value)


def structurally_equal(left: object, right: object) -> bool:
    """Return ``True`` when *left* and *right* hold the same data."""
    return _equal(left, right, set())


def _equal(left: object, right: object, visited: _Visited) -> bool:  # noqa: PLR0911
    if left is right:
        return True
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, _ATOMIC_TYPES) or isinstance(right, _ATOMIC_TYPES):
        return type(left) is type(right) and left == right
    if isinstance(left, numbers.Number) and isinstance(right, numbers.Number):
        if _is_nan(left) and _is_nan(right):
            return True
        return bool(left == right)
    if isinstance(left, enum.Enum) or isinstance(right, enum.Enum):
        return False

    # A pair still under comparison further up the stack is assumed equal;
    # any real difference is reported by the outer frame.
    pair = (id(left), id(right))
    if pair in visited:
        return True
    visited.add(pair)
    try:
        return _compound_equal(left, right, visited)
    finally:
        visited.discard(pair)


def _compound_equal(left: object, right: object, visited: _Visited) -> bool:
    if isinstance(left, (list, tuple)) or isinstance(right, (list, tuple)):
        return _sequences_equal(left, right, visited)
    if isinstance(left, Set) or isinstance(right, Set):
        return _sets_equal(left, right, visited)
    if type(left) is type(right) and _has_custom_eq(type(left)):
        return bool(left == right)

    left_map = _as_mapping(left)
    right_map = _as_mapping(right)
    if left_map is None or right_map is None:
        return bool(left == right)
    return _mappings_equal(left_map, right_map, visited)


def _sequences_equal(left: object, right: object, visited: _Visited) -> bool:
    if not (isinstance(left, (list, tuple)) and isinstance(right, (list, tuple))):
        return False
    if len(left) != len(right):
        return False
    return all(_equal(a, b, visited) for a, b in zip(left, right, strict=True))


def _sets_equal(left: object, right: object, visited: _Visited) -> bool:
    if not (isinstance(left, Set) and isinstance(right, Set)):
        return False
    if len(left) != len(right):
        return False
    return all(any(_equal(a, b, visited) for b in right) for a in left)


def _mappings_equal(
    left: Mapping[t.Any, t.Any], right: Mapping[t.Any, t.Any], visited: _Visited
) -> bool:
    if len(left) != len(right):
        return False
    for key, value in left.items():
        if key not in right:
            return False
        if not _equal(value, right[key], visited):
            return False
    return True


__all__ = ["OPAQUE_ATTR", "own_data", "structurally_equal"]
