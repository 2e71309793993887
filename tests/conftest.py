"""Shared test fixtures for the feedgate test suite."""

from __future__ import annotations

import pytest

from feedgate.cache import Cache


class FakeClock:
    """Manually advanced monotonic clock for TTL tests."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock: FakeClock) -> Cache:
    """Cache with the production default TTL driven by the fake clock."""
    return Cache(300, clock=clock)
