"""Shared fixtures."""

from collections.abc import Generator

import pytest
from aioresponses import aioresponses as aioresponses_cls

from e2e_runner.testing.clock import FakeClock


@pytest.fixture
def aioresponses() -> Generator[aioresponses_cls]:
    """Intercept aiohttp requests."""
    with aioresponses_cls() as mocked:
        yield mocked


@pytest.fixture
def clock() -> FakeClock:
    """Create a clock frozen at a known time."""
    return FakeClock()
