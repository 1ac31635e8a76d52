"""Render arbitrary runtime values into stable diagnostic text."""

from __future__ import annotations

import enum
import json
import types
import typing as t
from collections.abc import Mapping, Set

from .structure import own_data

CIRCULAR = "[Circular]"


def render(value: object) -> str:
    """Return a compact, deterministic rendering of *value*.

    Strings are double quoted, numbers, booleans and ``None`` use their
    literal text, containers use a compact JSON-like notation and instances
    carrying data are prefixed with their class name, for example
    ``Complex{"a":"hello","b":123}``.
    """
    return _render(value, set())


def _render(value: object, active: set[int]) -> str:  # noqa: PLR0911
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if value is None or isinstance(value, (bool, int, float)):
        return repr(value)
    if isinstance(value, enum.Enum):
        return f"{type(value).__name__}.{value.name}"

    marker = id(value)
    if marker in active:
        return CIRCULAR
    active.add(marker)
    try:
        if isinstance(value, Mapping):
            return _render_mapping(value, active)
        if isinstance(value, (list, tuple)):
            return _render_items(value, active)
        if isinstance(value, Set):
            return _render_items(sorted(value, key=render), active)
        data = own_data(value)
        if data is None:
            return repr(value)
        if isinstance(value, types.SimpleNamespace):
            return _render_mapping(data, active)
        return type(value).__name__ + _render_mapping(data, active)
    finally:
        active.discard(marker)


def _render_mapping(mapping: Mapping[t.Any, t.Any], active: set[int]) -> str:
    body = ",".join(
        f"{_render(key, active)}:{_render(item, active)}"
        for key, item in mapping.items()
    )
    return "{" + body + "}"


def _render_items(items: t.Iterable[object], active: set[int]) -> str:
    return "[" + ",".join(_render(item, active) for item in items) + "]"


__all__ = ["CIRCULAR", "render"]
