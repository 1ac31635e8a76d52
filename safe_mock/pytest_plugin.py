"""Pytest plugin providing the ``safe_mock`` fixture.

The fixture yields a :class:`~safe_mock.registry.MockRegistry`. With strict
stubs enabled, a test fails at teardown when a stub it declared never
answered a call. Strictness is read from the first source that sets it::

    @pytest.mark.safe_mock(strict_stubs=True)          # per test
    @pytest.mark.parametrize("safe_mock", [True], indirect=True)
    pytest --safe-mock-strict-stubs                     # per run
    safe_mock_strict_stubs = true                       # ini file
"""

from __future__ import annotations

import logging
import typing as t
from collections.abc import Mapping

import pytest

from .errors import UnusedStubError
from .registry import MockRegistry

logger = logging.getLogger(__name__)

STRICT_STUBS = "safe_mock_strict_stubs"
REPORT_SECTION = "safe_mock unused stubs"

_CALL_FAILED = pytest.StashKey[bool]()
_DEFERRED_REPORT = pytest.StashKey[str]()


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register the strict-stubs flags and ini option."""
    group = parser.getgroup("safe_mock")
    group.addoption(
        "--safe-mock-strict-stubs",
        action="store_true",
        dest=STRICT_STUBS,
        default=None,
        help="Fail tests that declare stubs which never answer a call.",
    )
    group.addoption(
        "--no-safe-mock-strict-stubs",
        action="store_false",
        dest=STRICT_STUBS,
        default=None,
        help="Allow unused stubs, whatever the ini file says.",
    )
    parser.addini(
        STRICT_STUBS,
        "Fail tests that declare safe_mock stubs which never answer a call.",
        type="bool",
        default=False,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register the ``safe_mock`` marker."""
    config.addinivalue_line(
        "markers",
        "safe_mock(strict_stubs): fail this test if a stub never answers a call.",
    )


@pytest.hookimpl(wrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[None]
) -> t.Generator[None, pytest.TestReport, pytest.TestReport]:
    """Note test body failures and attach unused stubs reported late."""
    report = yield
    if report.when == "call":
        item.stash[_CALL_FAILED] = report.failed
    elif report.when == "teardown" and _DEFERRED_REPORT in item.stash:
        report.sections.append((REPORT_SECTION, item.stash[_DEFERRED_REPORT]))
        del item.stash[_DEFERRED_REPORT]
    return report


def _from_marker(request: pytest.FixtureRequest) -> object:
    marker = request.node.get_closest_marker("safe_mock")
    return None if marker is None else marker.kwargs.get("strict_stubs")


def _from_param(request: pytest.FixtureRequest) -> object:
    param = getattr(request, "param", None)
    value = param.get("strict_stubs") if isinstance(param, Mapping) else param
    if param is not None and not isinstance(value, bool):
        msg = (
            "safe_mock fixture param must be a bool or a mapping with a bool "
            f"'strict_stubs' entry, got {param!r}"
        )
        raise TypeError(msg)
    return value


def _from_option(request: pytest.FixtureRequest) -> object:
    return request.config.getoption(STRICT_STUBS)


def _from_ini(request: pytest.FixtureRequest) -> object:
    return request.config.getini(STRICT_STUBS)


# Highest priority first.
_STRICT_STUBS_SOURCES: tuple[t.Callable[[pytest.FixtureRequest], object], ...] = (
    _from_marker,
    _from_param,
    _from_option,
    _from_ini,
)


def _resolve_strict_stubs(request: pytest.FixtureRequest) -> bool:
    """Return the strictness set by the highest-priority source."""
    for source in _STRICT_STUBS_SOURCES:
        value = source(request)
        if value is not None:
            return bool(value)
    return False


@pytest.fixture
def safe_mock(request: pytest.FixtureRequest) -> t.Iterator[MockRegistry]:
    """Provide a :class:`MockRegistry` for building mocks in a test."""
    strict = _resolve_strict_stubs(request)
    registry = MockRegistry()
    yield registry
    if not strict:
        return
    try:
        registry.verify_stubs_used()
    except UnusedStubError as err:
        logger.debug("Unused stubs in %s", request.node.nodeid)
        text = f"{type(err).__name__}: {err}"
        if request.node.stash.get(_CALL_FAILED, False):
            # The body's failure is the one to report; keep this as context.
            request.node.stash[_DEFERRED_REPORT] = text
            return
        pytest.fail(text)
