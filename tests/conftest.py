"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from structlog.testing import capture_logs

from bigdecimal.config import MathConfig


@pytest.fixture
def captured_logs() -> Iterator[list[dict]]:
    """Capture structlog events emitted during the test."""
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def single_iteration_config() -> MathConfig:
    """Config that stops the approximation loops after one step."""
    return MathConfig(max_iterations=1)
