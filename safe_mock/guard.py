"""Placeholder values returned by calls that have no stubbed result.

An :class:`Unmocked` guard stands in for the value a test forgot to stub.
It fails loudly the moment code tries to use it, naming the original call,
instead of letting ``None`` travel further into the code under test.
"""

from __future__ import annotations

import dataclasses as dc
import typing as t

from .errors import UnmockedCallError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .arguments import ArgumentTuple
    from .ledger import MethodLedger, Stub


class UnmockedReason(t.Protocol):
    """Explains why a call produced a guard instead of a value."""

    def reason_and_advice(self) -> str:
        """Return the message raised when the guard is used."""
        ...


@dc.dataclass(frozen=True, slots=True)
class NeverStubbed:
    """The member has no stubs at all."""

    name: str

    def reason_and_advice(self) -> str:
        """Describe the missing stub."""
        return (
            f"{self.name} has not been mocked yet. Set a mock return value for it."
        )


@dc.dataclass(frozen=True, slots=True)
class ArgumentsMismatch:
    """The method is stubbed, but for different arguments."""

    name: str
    stubbed: ArgumentTuple
    actual: ArgumentTuple

    def reason_and_advice(self) -> str:
        """Show the stubbed arguments next to the ones actually used."""
        return (
            f"{self.name} was stubbed to return a value when called with "
            f"{self.stubbed.render()} but was called with: {self.actual.render()}."
        )


@dc.dataclass(frozen=True, slots=True)
class StubCapture:
    """The ledger slot a capturing call would bind a return value to."""

    ledger: MethodLedger
    arguments: ArgumentTuple

    def bind(self, value: t.Any) -> Stub:
        """Register *value* for the captured arguments."""
        return self.ledger.add_stub(self.arguments, value)


def _passthrough(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _refuse(self: Unmocked, *args: t.Any) -> t.NoReturn:
    raise UnmockedCallError(_message(self))


class Unmocked:
    """A value that raises :class:`UnmockedCallError` on any use.

    Reading a regular attribute, assigning or deleting one, calling the
    guard, indexing, iterating, sizing, truth-testing, membership tests,
    arithmetic, ordering and numeric conversion all raise. Dunder lookups
    pass through so the guard can still be displayed, compared by identity
    and type-checked.
    """

    __slots__ = ("_capture", "_reason")
    __safe_mock_opaque__ = True

    def __init__(
        self, reason: UnmockedReason, capture: StubCapture | None = None
    ) -> None:
        object.__setattr__(self, "_reason", reason)
        object.__setattr__(self, "_capture", capture)

    def __getattribute__(self, name: str) -> t.Any:
        if _passthrough(name):
            return object.__getattribute__(self, name)
        raise UnmockedCallError(_message(self))

    def __setattr__(self, name: str, value: t.Any) -> None:
        raise UnmockedCallError(_message(self))

    def __delattr__(self, name: str) -> None:
        raise UnmockedCallError(_message(self))

    def __call__(self, *args: t.Any, **kwargs: t.Any) -> t.NoReturn:
        raise UnmockedCallError(_message(self))

    def __getitem__(self, key: t.Any) -> t.NoReturn:
        raise UnmockedCallError(_message(self))

    def __setitem__(self, key: t.Any, value: t.Any) -> t.NoReturn:
        raise UnmockedCallError(_message(self))

    def __delitem__(self, key: t.Any) -> t.NoReturn:
        raise UnmockedCallError(_message(self))

    def __iter__(self) -> t.NoReturn:
        raise UnmockedCallError(_message(self))

    def __len__(self) -> t.NoReturn:
        raise UnmockedCallError(_message(self))

    def __contains__(self, item: t.Any) -> t.NoReturn:
        raise UnmockedCallError(_message(self))

    def __bool__(self) -> t.NoReturn:
        raise UnmockedCallError(_message(self))

    def __enter__(self) -> t.NoReturn:
        raise UnmockedCallError(_message(self))

    def __exit__(self, *exc_info: object) -> t.NoReturn:
        raise UnmockedCallError(_message(self))

    def __aenter__(self) -> t.NoReturn:
        raise UnmockedCallError(_message(self))

    def __aexit__(self, *exc_info: object) -> t.NoReturn:
        raise UnmockedCallError(_message(self))

    def __await__(self) -> t.NoReturn:
        raise UnmockedCallError(_message(self))

    # Operators, ordering and numeric conversion raise the unmocked message.
    __lt__ = __le__ = __gt__ = __ge__ = _refuse
    __add__ = __radd__ = __sub__ = __rsub__ = _refuse
    __mul__ = __rmul__ = __matmul__ = __rmatmul__ = _refuse
    __truediv__ = __rtruediv__ = __floordiv__ = __rfloordiv__ = _refuse
    __mod__ = __rmod__ = __divmod__ = __rdivmod__ = __pow__ = __rpow__ = _refuse
    __lshift__ = __rlshift__ = __rshift__ = __rrshift__ = _refuse
    __and__ = __rand__ = __or__ = __ror__ = __xor__ = __rxor__ = _refuse
    __neg__ = __pos__ = __abs__ = __invert__ = _refuse
    __int__ = __float__ = __complex__ = __index__ = _refuse
    __round__ = __trunc__ = __floor__ = __ceil__ = _refuse

    def __str__(self) -> str:
        return _message(self)

    def __repr__(self) -> str:
        return f"<Unmocked: {_message(self)}>"


def _message(guard: Unmocked) -> str:
    reason: UnmockedReason = object.__getattribute__(guard, "_reason")
    return reason.reason_and_advice()


def capture_of(value: object) -> StubCapture | None:
    """Return the stub capture carried by *value*, if it is a capturing guard.

    This is the only way to reach a guard's capture; the normal attribute
    surface raises.
    """
    if not isinstance(value, Unmocked):
        return None
    return object.__getattribute__(value, "_capture")


__all__ = [
    "ArgumentsMismatch",
    "NeverStubbed",
    "StubCapture",
    "Unmocked",
    "UnmockedReason",
    "capture_of",
]
