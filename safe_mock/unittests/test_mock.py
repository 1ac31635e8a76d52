"""Unit tests for the mock engine and its method ledgers."""

from __future__ import annotations

import logging
import typing as t

import pytest

from safe_mock import build, when
from safe_mock.arguments import ArgumentTuple
from safe_mock.errors import UnmockedCallError
from safe_mock.guard import Unmocked
from safe_mock.ledger import MethodLedger
from safe_mock.mock import InterfaceShape, MockMethod, SafeMock, methods_of


class SomeService(t.Protocol):
    """Interface used throughout the engine tests."""

    name: str

    def create_something_no_args(self) -> str: ...

    def create_something_one_arg(self, one: str) -> str: ...

    def create_something_multiple_args(
        self, one: str, two: str, three: str
    ) -> int: ...

    def with_default(self, value: int, scale: int = 1) -> int: ...

    @staticmethod
    def helper(value: int) -> int: ...

    @classmethod
    def factory(cls, value: int) -> SomeService: ...

    @property
    def size(self) -> int: ...


class ExtendedService(SomeService, t.Protocol):
    """Interface inheriting members from ``SomeService``."""

    def extra(self) -> None: ...


class Catalogue(t.Protocol):
    """Interface whose member names collide with common helper names."""

    def methods(self) -> list[str]: ...

    def ledger(self) -> str: ...


def test_members_are_created_lazily_and_cached() -> None:
    """Each member resolves to one stable handle per mock."""
    mock = SafeMock()

    assert methods_of(mock) == {}
    first = mock.anything
    assert isinstance(first, MockMethod)
    assert mock.anything is first
    assert methods_of(mock) == {"anything": first}


def test_any_public_member_name_is_mocked() -> None:
    """Interface members are never shadowed by attributes of the mock."""
    catalogue = build(Catalogue)
    free_form = SafeMock()

    assert isinstance(catalogue.methods, MockMethod)
    assert isinstance(free_form.methods, MockMethod)
    when(catalogue.methods()).returns(["a"])

    assert catalogue.methods() == ["a"]
    assert set(methods_of(catalogue)) == {"methods"}


def test_methods_of_rejects_non_mocks() -> None:
    """Only mocks have method handles to list."""
    with pytest.raises(TypeError, match="got str"):
        methods_of("not a mock")


def test_separate_mocks_have_separate_ledgers() -> None:
    """Ledgers belong to the mock that created them."""
    one, two = SafeMock(), SafeMock()

    one.f("x")

    assert len(one.f.ledger.calls) == 1
    assert two.f.ledger.calls == []


def test_every_call_is_recorded_in_order() -> None:
    """Calls are appended chronologically without deduplication."""
    mock = build(SomeService)

    mock.create_something_one_arg("b")
    mock.create_something_one_arg("a")
    mock.create_something_one_arg("b")

    ledger = t.cast("MockMethod", mock.create_something_one_arg).ledger
    assert [call.render() for call in ledger.calls] == ['("b")', '("a")', '("b")']


def test_stub_declaring_calls_are_recorded() -> None:
    """Calls made only to declare a stub still land in the history."""
    mock = build(SomeService)

    when(mock.create_something_no_args()).returns("value")

    ledger = t.cast("MockMethod", mock.create_something_no_args).ledger
    assert ledger.calls == [ArgumentTuple.capture()]


def test_unstubbed_call_returns_never_stubbed_guard() -> None:
    """Without stubs, calls return a guard naming the method."""
    mock = build(SomeService)

    result = mock.create_something_no_args()

    assert isinstance(result, Unmocked)
    assert str(result) == (
        "create_something_no_args has not been mocked yet. "
        "Set a mock return value for it."
    )


def test_mismatched_call_returns_guard_with_stubbed_arguments() -> None:
    """With stubs for other arguments, the guard explains the mismatch."""
    mock = build(SomeService)
    when(mock.create_something_one_arg("when")).returns("hello")

    result = mock.create_something_one_arg("not matching")

    assert str(result) == (
        'create_something_one_arg was stubbed to return a value when called '
        'with ("when") but was called with: ("not matching").'
    )


def test_mismatch_prefers_stub_with_same_call_shape() -> None:
    """The guard explains using the first stub of the same arity."""
    mock = SafeMock()
    when(mock.f()).returns(0)
    when(mock.f("a", "b")).returns(2)

    result = mock.f("a", "c")

    assert 'when called with ("a", "b")' in str(result)


def test_chained_use_of_unstubbed_result_names_original_call() -> None:
    """Failures surface where the result is used, naming the original call."""
    mock = SafeMock()

    with pytest.raises(
        UnmockedCallError,
        match="outer has not been mocked yet. Set a mock return value for it.",
    ):
        _ = mock.outer().inner_field


def test_keyword_and_positional_calls_are_normalised() -> None:
    """Arguments bound through the interface signature compare equal."""
    mock = build(SomeService)
    when(mock.create_something_one_arg(one="x")).returns("stubbed")

    assert mock.create_something_one_arg("x") == "stubbed"


def test_defaults_are_not_filled_in() -> None:
    """Only the arguments actually passed are recorded."""
    mock = build(SomeService)

    mock.with_default(3)

    ledger = t.cast("MockMethod", mock.with_default).ledger
    assert ledger.calls[0].render() == "(3)"


def test_calls_not_fitting_the_signature_are_recorded_as_given() -> None:
    """The engine never raises at call time, even for bad arguments."""
    mock = build(SomeService)

    result = mock.create_something_one_arg("a", "b", "c")  # type: ignore[call-arg]

    assert isinstance(result, Unmocked)
    ledger = t.cast("MockMethod", mock.create_something_one_arg).ledger
    assert ledger.calls == [ArgumentTuple.capture("a", "b", "c")]


def test_unknown_interface_member_raises_attribute_error() -> None:
    """Only members declared by the interface exist on its mock."""
    mock = build(SomeService)

    with pytest.raises(AttributeError, match="SomeService has no member 'missing'"):
        _ = mock.missing  # type: ignore[attr-defined]


def test_data_members_return_guards() -> None:
    """Declared fields and properties yield never-stubbed guards."""
    mock = build(SomeService)

    with pytest.raises(UnmockedCallError, match="name has not been mocked yet"):
        _ = mock.name.upper()
    assert isinstance(mock.size, Unmocked)


@pytest.mark.parametrize("name", ["_private", "__wrapped__", "_pytestfixturefunction"])
def test_private_names_are_not_mocked(name: str) -> None:
    """Underscore names raise ``AttributeError`` so introspection behaves."""
    mock = SafeMock()

    assert not hasattr(mock, name)


def test_interface_shape_collects_inherited_members() -> None:
    """Methods and fields are gathered across the interface hierarchy."""
    shape = InterfaceShape.of(ExtendedService)

    assert shape.name == "ExtendedService"
    assert {
        "create_something_no_args",
        "create_something_one_arg",
        "create_something_multiple_args",
        "with_default",
        "helper",
        "factory",
        "extra",
    } <= set(shape.methods)
    assert shape.fields == {"name", "size"}
    assert "extra" in shape
    assert "missing" not in shape


def test_interface_shape_drops_receivers_from_signatures() -> None:
    """``self`` and ``cls`` are removed; static methods keep every parameter."""
    shape = InterfaceShape.of(SomeService)

    assert str(shape.methods["create_something_one_arg"]) == "(one: 'str') -> 'str'"
    factory, helper = shape.methods["factory"], shape.methods["helper"]
    assert factory is not None
    assert helper is not None
    assert list(factory.parameters) == ["value"]
    assert list(helper.parameters) == ["value"]


def test_dir_lists_interface_members() -> None:
    """``dir()`` exposes the interface members for completion."""
    mock = build(SomeService)

    assert {"create_something_no_args", "name"} <= set(dir(mock))


def test_repr() -> None:
    """Mocks and handles describe themselves."""
    mock = build(SomeService)
    mock.create_something_no_args()

    assert repr(mock) == "<SafeMock of SomeService>"
    assert repr(SafeMock()) == "<SafeMock>"
    assert (
        repr(mock.create_something_no_args)
        == "<MockMethod create_something_no_args calls=1>"
    )


def test_ledger_find_stub_returns_first_declared_match() -> None:
    """Lookups walk stubs in declaration order."""
    ledger = MethodLedger("f")
    first = ledger.add_stub(ArgumentTuple.capture("x"), "first")
    ledger.add_stub(ArgumentTuple.capture("x"), "second")

    assert ledger.find_stub(ArgumentTuple.capture("x")) is first
    assert ledger.find_stub(ArgumentTuple.capture("y")) is None


def test_ledger_unused_stubs() -> None:
    """Stubs that never answered a call are reported as unused."""
    mock = SafeMock()
    when(mock.f("used")).returns(1)
    when(mock.f("unused")).returns(2)

    mock.f("used")

    unused = mock.f.ledger.unused_stubs()
    assert [stub.value for stub in unused] == [2]


def test_bookkeeping_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Calls and stubs are logged at DEBUG level."""
    caplog.set_level(logging.DEBUG, logger="safe_mock")
    mock = SafeMock()

    when(mock.f("x")).returns(1)

    messages = [record.getMessage() for record in caplog.records]
    assert 'Recorded call f("x")' in messages
    assert 'Stubbed f("x") -> 1' in messages
