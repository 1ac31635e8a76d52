"""Exception hierarchy raised by safe-mock."""

from __future__ import annotations

import typing as t

from .arguments import render_interactions

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .arguments import ArgumentTuple


class SafeMockError(Exception):
    """Base class for all safe-mock errors."""


class UnmockedCallError(SafeMockError):
    """A value returned by an unstubbed call was used."""


class StubRegistrationError(SafeMockError):
    """``when()`` received something other than an unstubbed call result."""


class VerificationError(SafeMockError, AssertionError):
    """A recorded interaction did not satisfy a verification."""


class NotCalledError(VerificationError):
    """The verified method was never called."""

    def __init__(self, method_name: str) -> None:
        super().__init__(f"{method_name} was not called")
        self.method_name = method_name


class CallsDontMatchError(VerificationError):
    """No recorded call matched the expected arguments."""

    def __init__(
        self,
        expected_call: ArgumentTuple,
        other_interactions: t.Sequence[ArgumentTuple],
        method_name: str,
    ) -> None:
        self.expected_call = expected_call
        self.other_interactions = list(other_interactions)
        self.method_name = method_name
        super().__init__(self._format())

    def _format(self) -> str:
        lines = [
            f"{self.method_name} was not called with: {self.expected_call.render()}"
        ]
        if self.other_interactions:
            rendered = render_interactions(self.other_interactions)
            lines.append(f"       Other interactions with this mock: {rendered}")
        return "\n".join(lines)


class UnusedStubError(VerificationError):
    """Stubs were declared but never answered a call."""


__all__ = [
    "CallsDontMatchError",
    "NotCalledError",
    "SafeMockError",
    "StubRegistrationError",
    "UnmockedCallError",
    "UnusedStubError",
    "VerificationError",
]
