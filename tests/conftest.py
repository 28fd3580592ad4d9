"""Pytest configuration for suppcache tests."""

from datetime import timedelta

import pytest


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float | timedelta) -> None:
        if isinstance(seconds, timedelta):
            seconds = seconds.total_seconds()
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Provide a clock tests can move forward."""
    return FakeClock()
