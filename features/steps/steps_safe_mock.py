"""Behave steps for the safe mock feature."""

from __future__ import annotations

import typing as t

from behave import given, then, when  # type: ignore[attr-defined]

import safe_mock
from safe_mock.errors import UnmockedCallError, VerificationError


class Payload:
    """Argument object compared by its fields."""

    def __init__(self, a: str, b: int) -> None:
        self.a = a
        self.b = b


class BehaveContext(t.Protocol):
    """Behave step context for safe mock scenarios."""

    mock: t.Any
    result: object
    error: Exception | None


@given("a safe mock")
def step_create_mock(context: BehaveContext) -> None:
    """Create a mock without an interface."""
    context.mock = safe_mock.build()
    context.result = None
    context.error = None


@given('the method "{name}" is stubbed with "{arg}" to return "{value}"')
def step_stub_method(context: BehaveContext, name: str, arg: str, value: str) -> None:
    """Declare a return value for a single string argument."""
    safe_mock.when(getattr(context.mock, name)(arg)).returns(value)


@given(
    'the method "{name}" is stubbed for a payload with a "{a}" and b {b:d} '
    'to return "{value}"'
)
def step_stub_method_for_payload(
    context: BehaveContext, name: str, a: str, b: int, value: str
) -> None:
    """Declare a return value for a payload argument."""
    safe_mock.when(getattr(context.mock, name)(Payload(a, b))).returns(value)


@when('I call "{name}" with "{arg}"')
def step_call_method(context: BehaveContext, name: str, arg: str) -> None:
    """Call a mocked method with one string argument."""
    context.result = getattr(context.mock, name)(arg)


@when('I call "{name}" with no arguments')
def step_call_without_arguments(context: BehaveContext, name: str) -> None:
    """Call a mocked method without arguments."""
    context.result = getattr(context.mock, name)()


@when('I call "{name}" with a payload with a "{a}" and b {b:d}')
def step_call_with_payload(context: BehaveContext, name: str, a: str, b: int) -> None:
    """Call a mocked method with a fresh payload instance."""
    context.result = getattr(context.mock, name)(Payload(a, b))


@when('I read "{field}" from the result')
def step_read_from_result(context: BehaveContext, field: str) -> None:
    """Read an attribute from the last result, keeping any error."""
    try:
        getattr(context.result, field)
    except UnmockedCallError as exc:
        context.error = exc


@when('I verify that "{name}" was called')
def step_verify_called(context: BehaveContext, name: str) -> None:
    """Check that a method was called at least once."""
    try:
        safe_mock.verify(getattr(context.mock, name)).called()
    except VerificationError as exc:
        context.error = exc


@when('I verify that "{name}" was called with "{arg}"')
def step_verify_called_with(context: BehaveContext, name: str, arg: str) -> None:
    """Check that a method was called with one string argument."""
    try:
        safe_mock.verify(getattr(context.mock, name)).called_with(arg)
    except VerificationError as exc:
        context.error = exc


@then('the result should be "{value}"')
def step_check_result(context: BehaveContext, value: str) -> None:
    """Assert the last call returned *value*."""
    assert context.result == value  # noqa: S101


@then("the result should be an unmocked guard")
def step_check_guard(context: BehaveContext) -> None:
    """Assert the last call returned a guard."""
    assert isinstance(context.result, safe_mock.Unmocked)  # noqa: S101


@then('verification should fail with "{text}"')
def step_check_verification_error(context: BehaveContext, text: str) -> None:
    """Assert verification failed with a message containing *text*."""
    assert isinstance(context.error, VerificationError)  # noqa: S101
    assert text in str(context.error)  # noqa: S101


@then('the read should fail with "{text}"')
def step_check_read_error(context: BehaveContext, text: str) -> None:
    """Assert reading from the result raised with *text*."""
    assert isinstance(context.error, UnmockedCallError)  # noqa: S101
    assert str(context.error) == text  # noqa: S101
