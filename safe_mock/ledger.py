"""Per-method record of calls and declared stubs."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as t

from .printer import render

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .arguments import ArgumentTuple

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True, eq=False)
class Stub:
    """A return value bound to one argument shape."""

    arguments: ArgumentTuple
    value: t.Any
    hits: int = 0

    def describe(self, method_name: str) -> str:
        """Return ``name(args) -> value`` for diagnostics."""
        return f"{method_name}{self.arguments.render()} -> {render(self.value)}"


@dc.dataclass(slots=True, eq=False)
class MethodLedger:
    """Call history and stub bindings for a single mocked method.

    ``calls`` keeps every invocation in chronological order, including the
    calls made only to declare a stub. ``stubs`` keeps bindings in
    declaration order; lookups return the first match and never consume it.
    """

    name: str
    calls: list[ArgumentTuple] = dc.field(default_factory=list)
    stubs: list[Stub] = dc.field(default_factory=list)

    def record(self, arguments: ArgumentTuple) -> None:
        """Append *arguments* to the call history."""
        self.calls.append(arguments)
        logger.debug("Recorded call %s%s", self.name, arguments.render())

    def add_stub(self, arguments: ArgumentTuple, value: t.Any) -> Stub:
        """Bind *value* to *arguments* after any existing stubs."""
        stub = Stub(arguments, value)
        self.stubs.append(stub)
        logger.debug("Stubbed %s", stub.describe(self.name))
        return stub

    def find_stub(self, arguments: ArgumentTuple) -> Stub | None:
        """Return the first stub declared for *arguments*, if any."""
        for stub in self.stubs:
            if stub.arguments == arguments:
                return stub
        return None

    def closest_stub(self, arguments: ArgumentTuple) -> Stub | None:
        """Return the stub most useful for explaining a failed lookup.

        Prefers the first stub whose call shape (positional count and keyword
        names) matches *arguments*, falling back to the first stub declared.
        """
        for stub in self.stubs:
            if stub.arguments.arity == arguments.arity:
                return stub
        return self.stubs[0] if self.stubs else None

    def was_called_with(self, arguments: ArgumentTuple) -> bool:
        """Return ``True`` if any recorded call equals *arguments*."""
        return any(call == arguments for call in self.calls)

    def unused_stubs(self) -> list[Stub]:
        """Return stubs that have not answered any call."""
        return [stub for stub in self.stubs if stub.hits == 0]


__all__ = ["MethodLedger", "Stub"]
