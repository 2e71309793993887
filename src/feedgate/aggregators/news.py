"""Hacker News top stories.

One index call for the top story ids, then one item call per id, all issued
together. A failed item call contributes ``None`` and is filtered out with
deleted or untitled items. A failed index call is fatal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from feedgate.aggregators.base import aggregate
from feedgate.errors import ErrorCode, UpstreamFetchError
from feedgate.fanout import gather_settled

if TYPE_CHECKING:
    from feedgate.state import AppState

SOURCE = "news"


async def get_news(state: AppState) -> list[dict[str, Any]]:
    settings = state.settings.sources.news
    return await aggregate(
        state,
        source=SOURCE,
        collect=lambda: _collect(state),
        ttl_seconds=settings.ttl_seconds,
        max_items=settings.max_items,
    )


async def _collect(state: AppState) -> list[dict[str, Any]]:
    settings = state.settings.sources.news

    story_ids = await state.fetcher.get_json(settings.top_stories_url, source=SOURCE)
    if not isinstance(story_ids, list):
        raise UpstreamFetchError(
            SOURCE,
            f"Expected a list of story ids, got {type(story_ids).__name__}",
            code=ErrorCode.UPSTREAM_BAD_RESPONSE,
        )

    stories = await gather_settled(
        [
            (
                str(story_id),
                state.fetcher.get_json(settings.item_url.format(id=story_id), source=SOURCE),
            )
            for story_id in story_ids[: settings.max_story_ids]
        ],
        default=lambda: None,
        source=SOURCE,
    )
    # Deleted items come back as JSON null
    return [story for story in stories if isinstance(story, dict) and story.get("title")]
