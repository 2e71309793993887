"""GitHub repositories created in the last week, most starred first.

A single search call with no fan-out. Unlike the other sources there is no
partial result to fall back on, so any failure is fatal to the request.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from typing import TYPE_CHECKING, Any

from feedgate.aggregators.base import aggregate
from feedgate.errors import ErrorCode, UpstreamFetchError

if TYPE_CHECKING:
    from feedgate.state import AppState

SOURCE = "github"

_ACCEPT = "application/vnd.github.v3+json"


def created_after(lookback_days: int, today: date | None = None) -> str:
    """Return the search qualifier ``created:>YYYY-MM-DD`` for the lookback window."""
    today = today or datetime.now(UTC).date()
    return f"created:>{(today - timedelta(days=lookback_days)).isoformat()}"


async def get_trending_repositories(state: AppState) -> list[dict[str, Any]]:
    settings = state.settings.sources.github
    return await aggregate(
        state,
        source=SOURCE,
        collect=lambda: _collect(state),
        ttl_seconds=settings.ttl_seconds,
        max_items=settings.max_items,
    )


async def _collect(state: AppState) -> list[dict[str, Any]]:
    settings = state.settings.sources.github
    payload = await state.fetcher.get_json(
        settings.search_url,
        source=SOURCE,
        params={
            "q": created_after(settings.lookback_days),
            "sort": "stars",
            "order": "desc",
            "per_page": settings.per_page,
        },
        headers={"Accept": _ACCEPT},
    )

    items = payload.get("items") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        raise UpstreamFetchError(
            SOURCE,
            "Search response has no 'items' list",
            code=ErrorCode.UPSTREAM_BAD_RESPONSE,
        )
    return items
