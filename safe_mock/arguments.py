"""Immutable capture of the arguments passed to one call."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from .printer import render
from .structure import structurally_equal


@dc.dataclass(frozen=True, slots=True, eq=False)
class ArgumentTuple:
    """Positional and keyword arguments of a single invocation.

    Equality is structural: two tuples are equal when they have the same
    arity and their elements hold the same data, whatever the classes of the
    objects involved. Keyword order is irrelevant.
    """

    args: tuple[t.Any, ...] = ()
    kwargs: tuple[tuple[str, t.Any], ...] = ()

    @classmethod
    def capture(cls, *args: t.Any, **kwargs: t.Any) -> ArgumentTuple:
        """Build a tuple from a call's ``*args`` and ``**kwargs``."""
        return cls(tuple(args), tuple(kwargs.items()))

    @property
    def arity(self) -> tuple[int, frozenset[str]]:
        """Return the positional count and keyword names of this call."""
        return len(self.args), frozenset(name for name, _ in self.kwargs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArgumentTuple):
            return NotImplemented
        if self.arity != other.arity:
            return False
        if not structurally_equal(self.args, other.args):
            return False
        return structurally_equal(dict(self.kwargs), dict(other.kwargs))

    __hash__ = None  # type: ignore[assignment]

    def render(self) -> str:
        """Return ``(a, b, name=c)`` with each element rendered for display."""
        parts = [render(arg) for arg in self.args]
        parts.extend(f"{name}={render(value)}" for name, value in self.kwargs)
        return "(" + ", ".join(parts) + ")"

    def __str__(self) -> str:
        return self.render()


def render_interactions(calls: t.Iterable[ArgumentTuple]) -> str:
    """Return ``[(a),(b)]`` for a sequence of recorded calls."""
    return "[" + ",".join(call.render() for call in calls) + "]"


__all__ = ["ArgumentTuple", "render_interactions"]
