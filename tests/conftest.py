"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from structlog.testing import capture_logs

from detfp import IFixed256


@pytest.fixture
def log_events() -> Iterator[list[dict]]:
    """Capture structlog events emitted during the test."""
    with capture_logs() as events:
        yield events


@pytest.fixture
def half() -> IFixed256:
    """0.5 as IFixed256."""
    return IFixed256.from_parts(0, 5, 1)


@pytest.fixture
def one() -> IFixed256:
    """1 as IFixed256."""
    return IFixed256.from_integer(1)


@pytest.fixture
def neg_one() -> IFixed256:
    """-1 as IFixed256."""
    return IFixed256.from_integer(1, negative=True)
