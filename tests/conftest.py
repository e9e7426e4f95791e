"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import logging
from typing import Callable, Iterator
from unittest.mock import MagicMock, patch

import pytest
import structlog

from retryer.config import Settings


class FlakyWork:
    """Callable that replays a script of outcomes, one per invocation.

    Exceptions in the script are raised, anything else is returned. The
    last outcome repeats once the script runs out.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0
        self.raised: list[BaseException] = []

    def __call__(self):
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, BaseException):
            # Fresh instance per call so identity checks are meaningful
            error = type(outcome)(*outcome.args)
            self.raised.append(error)
            raise error
        return outcome


@pytest.fixture
def test_settings() -> Settings:
    """Settings with the documented defaults, independent of the environment."""
    return Settings(
        MAX_ATTEMPTS=3,
        DELAY=0,
        DELAY_UNIT="seconds",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
    )


@pytest.fixture
def mock_sleep() -> Iterator[MagicMock]:
    """Patch time.sleep so pauses are recorded instead of waited."""
    with patch("retryer.duration.time.sleep") as sleep:
        yield sleep


@pytest.fixture
def flaky() -> Callable[..., FlakyWork]:
    """Factory for scripted work callables."""
    return FlakyWork


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Undo configure_logging() side effects after a test."""
    library_logger = logging.getLogger("retryer")
    handlers = list(library_logger.handlers)
    level = library_logger.level
    propagate = library_logger.propagate
    yield
    library_logger.handlers[:] = handlers
    library_logger.setLevel(level)
    library_logger.propagate = propagate
    structlog.reset_defaults()
