"""Track the mocks built during one test."""

from __future__ import annotations

import typing as t

from .errors import UnusedStubError
from .mock import SafeMock, build, methods_of
from .stubbing import when
from .verification import verify

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .ledger import Stub

T = t.TypeVar("T")


class MockRegistry:
    """Build mocks and check, at the end of a test, that every stub was used."""

    def __init__(self) -> None:
        self._mocks: list[SafeMock] = []

    def build(self, interface: type[T] | None = None) -> T:
        """Build a mock for *interface* and keep track of it."""
        mock = build(interface)
        self._mocks.append(t.cast("SafeMock", mock))
        return mock

    when = staticmethod(when)
    verify = staticmethod(verify)

    def unused_stubs(self) -> list[tuple[str, Stub]]:
        """Return ``(method name, stub)`` pairs that never answered a call."""
        return [
            (name, stub)
            for mock in self._mocks
            for name, method in methods_of(mock).items()
            for stub in method.ledger.unused_stubs()
        ]

    def verify_stubs_used(self) -> None:
        """Raise :class:`UnusedStubError` if any stub never answered a call."""
        unused = self.unused_stubs()
        if not unused:
            return
        lines = [f"  {stub.describe(name)}" for name, stub in unused]
        msg = "Stubs declared but never used:\n" + "\n".join(lines)
        raise UnusedStubError(msg)


__all__ = ["MockRegistry"]
