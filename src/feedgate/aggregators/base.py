"""Cache-check / collect / cap / cache-write protocol shared by every source.

Each source module supplies only a ``collect`` coroutine that returns its
merged, filtered items. This module owns everything else: serving cache
hits, turning unexpected orchestration failures into ``UpstreamFetchError``,
truncating to the source's cap, and writing the result back. Failures are
never cached.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from feedgate.errors import ErrorCode, UpstreamFetchError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from feedgate.state import AppState


async def aggregate(
    state: AppState,
    *,
    source: str,
    collect: Callable[[], Awaitable[list[Any]]],
    ttl_seconds: int | None,
    max_items: int,
) -> list[Any]:
    """Return the cached items for ``source`` or collect, cap and cache them.

    ``ttl_seconds=None`` uses the cache's default TTL.
    """
    log = structlog.get_logger().bind(source=source)

    cached = state.cache.get(source)
    if cached is not None:
        log.info("cache_hit", items=len(cached))
        return cached

    log.info("cache_miss_fetching")
    try:
        items = await collect()
    except UpstreamFetchError as exc:
        log.warning("aggregation_failed", code=exc.code, message=exc.message)
        raise
    except Exception as exc:
        log.error("aggregation_failed", code=ErrorCode.AGGREGATION_FAILED, exc_info=True)
        raise UpstreamFetchError(
            source,
            f"Aggregation failed for {source}: {exc}",
            code=ErrorCode.AGGREGATION_FAILED,
            recoverable=False,
        ) from exc

    result = items[:max_items]
    state.cache.set(source, result, ttl_seconds)
    log.info("aggregation_complete", items=len(result), candidates=len(items))
    return result
