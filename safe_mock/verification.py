"""The ``verify(...)`` assertion DSL."""

from __future__ import annotations

import typing as t

from .arguments import render_interactions
from .errors import CallsDontMatchError, NotCalledError, VerificationError
from .mock import MockMethod


class Verification:
    """Assertions over the call history of one mocked method.

    Every check reads the history afresh and never changes it, so repeating
    a check gives the same outcome until new calls are made.
    """

    def __init__(self, method: MockMethod) -> None:
        self._method = method

    @property
    def _name(self) -> str:
        return self._method.name

    def called(self) -> None:
        """Assert the method was called at least once."""
        if not self._method.ledger.calls:
            raise NotCalledError(self._name)

    def called_with(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Assert some recorded call had exactly these arguments."""
        expected = self._method.arguments_for(*args, **kwargs)
        ledger = self._method.ledger
        if not ledger.was_called_with(expected):
            raise CallsDontMatchError(expected, ledger.calls, self._name)

    def not_called(self) -> None:
        """Assert the method was never called."""
        calls = self._method.ledger.calls
        if calls:
            msg = (
                f"{self._name} was called {len(calls)} time(s): "
                f"{render_interactions(calls)}"
            )
            raise VerificationError(msg)

    def called_times(self, count: int) -> None:
        """Assert the method was called exactly *count* times."""
        calls = self._method.ledger.calls
        if len(calls) == count:
            return
        if not calls:
            raise NotCalledError(self._name)
        msg = (
            f"{self._name} was called {len(calls)} time(s), expected {count}: "
            f"{render_interactions(calls)}"
        )
        raise VerificationError(msg)


def verify(method: t.Callable[..., t.Any]) -> Verification:
    """Return assertions over the calls recorded for *method*.

    *method* must be a member taken from a mock, e.g. ``verify(mock.save)``.
    """
    if not isinstance(method, MockMethod):
        msg = (
            "verify() expects a method taken from a mock, "
            f"got {type(method).__name__}"
        )
        raise TypeError(msg)
    return Verification(method)


__all__ = ["Verification", "verify"]
