"""Behavioural tests for safe mocks using pytest-bdd."""

from __future__ import annotations

from pathlib import Path

from pytest_bdd import scenario

from tests.steps.mocking import *  # noqa: F403

FEATURES_DIR = Path(__file__).resolve().parent.parent / "features"
FEATURE = str(FEATURES_DIR / "safe_mock.feature")


@scenario(FEATURE, "stubbed method returns its value only for matching arguments")
def test_stubbed_method_returns_value() -> None:
    """Stubs answer matching calls and guard the rest."""


@scenario(FEATURE, "verifying an uncalled method fails")
def test_verify_uncalled_method() -> None:
    """``called()`` fails when the method was never called."""


@scenario(FEATURE, "verification failures list other interactions")
def test_verification_lists_interactions() -> None:
    """``called_with()`` failures show the recorded calls."""


@scenario(FEATURE, "object arguments match by their data")
def test_object_arguments_match_by_data() -> None:
    """Different instances with equal data share a stub."""


@scenario(FEATURE, "reading from an unstubbed result names the original call")
def test_unstubbed_result_names_call() -> None:
    """Using an unstubbed result explains which call produced it."""
