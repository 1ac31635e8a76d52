"""The ``when(...).returns(...)`` stub declaration DSL."""

from __future__ import annotations

import typing as t

from .errors import StubRegistrationError
from .guard import StubCapture, capture_of
from .printer import render

T = t.TypeVar("T")


class StubBuilder(t.Generic[T]):
    """Binds return values to the call captured by :func:`when`."""

    def __init__(self, capture: StubCapture) -> None:
        self._capture = capture

    def returns(self, value: T) -> None:
        """Answer every later call with the captured arguments with *value*.

        Stubs are durable: the value is returned each time an equal call
        occurs. Repeated ``returns()`` calls append further bindings, and the
        first binding declared for a given argument shape wins.
        """
        self._capture.bind(value)

    def __repr__(self) -> str:
        capture = self._capture
        return f"<StubBuilder {capture.ledger.name}{capture.arguments.render()}>"


def when(captured_call: T) -> StubBuilder[T]:
    """Start a stub declaration for the call that produced *captured_call*.

    Call the mocked method with the arguments to stub and pass the result
    straight in::

        when(mock.fetch("id-1")).returns(record)

    Raises
    ------
    StubRegistrationError
        If *captured_call* is not the result of an unstubbed call to a mocked
        method, for example a value an earlier stub already returns.
    """
    capture = capture_of(captured_call)
    if capture is None:
        msg = (
            "when() expects the result of calling a mocked method that has no "
            f"stub for those arguments yet; got {render(captured_call)}"
        )
        raise StubRegistrationError(msg)
    return StubBuilder(capture)


__all__ = ["StubBuilder", "when"]
