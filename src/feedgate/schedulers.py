"""Background scheduler coroutine for cache sweeping."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from feedgate.state import AppState

log = structlog.get_logger()


async def run_cache_sweep_scheduler(state: AppState) -> None:
    """Drop expired cache entries every ``cache.check_period_seconds``.

    Only reclaims memory; reads already treat expired entries as misses.
    Runs until cancelled by the lifespan.
    """
    interval = state.settings.cache.check_period_seconds
    while True:
        await asyncio.sleep(interval)
        try:
            state.cache.sweep_expired()
        except Exception:
            log.warning("cache_sweep_error", exc_info=True)
