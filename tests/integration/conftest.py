"""Integration test fixtures.

Provides AppState instances wired with a real Fetcher over an httpx client
(upstreams are mocked per test with respx) and a cache driven by the fake
clock from tests/conftest.py.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import pytest

from feedgate.config import Settings
from feedgate.fetcher import Fetcher
from feedgate.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable

    from feedgate.cache import Cache


@pytest.fixture()
async def http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture()
def make_state(http_client: httpx.AsyncClient, cache: Cache) -> Callable[..., AppState]:
    """Build an AppState; keyword arguments are passed to Settings."""

    def _make(**overrides: Any) -> AppState:
        return AppState(
            settings=Settings(**overrides),
            cache=cache,
            fetcher=Fetcher(http_client),
            http_client=http_client,
        )

    return _make


@pytest.fixture()
def app_state(make_state: Callable[..., AppState]) -> AppState:
    """AppState with default settings."""
    return make_state()
