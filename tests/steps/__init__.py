"""Aggregate pytest-bdd step definitions for safe mock features."""

from .mocking import *  # noqa: F403
