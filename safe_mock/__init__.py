"""Type-safe test doubles that record calls and fail loudly when unstubbed.

Build a mock, declare stubs by calling the mock, verify afterwards::

    service = build(Service)
    when(service.fetch("id-1")).returns(record)
    ...
    verify(service.fetch).called_with("id-1")
"""

from __future__ import annotations

from .arguments import ArgumentTuple, render_interactions
from .errors import (
    CallsDontMatchError,
    NotCalledError,
    SafeMockError,
    StubRegistrationError,
    UnmockedCallError,
    UnusedStubError,
    VerificationError,
)
from .guard import Unmocked
from .ledger import MethodLedger, Stub
from .mock import MockMethod, SafeMock, build, methods_of
from .printer import render
from .registry import MockRegistry
from .stubbing import StubBuilder, when
from .structure import structurally_equal
from .verification import Verification, verify

__all__ = [
    "ArgumentTuple",
    "CallsDontMatchError",
    "MethodLedger",
    "MockMethod",
    "MockRegistry",
    "NotCalledError",
    "SafeMock",
    "SafeMockError",
    "Stub",
    "StubBuilder",
    "StubRegistrationError",
    "Unmocked",
    "UnmockedCallError",
    "UnusedStubError",
    "Verification",
    "VerificationError",
    "build",
    "methods_of",
    "render",
    "render_interactions",
    "structurally_equal",
    "verify",
    "when",
]
