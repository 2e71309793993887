"""Hot posts from a fixed set of subreddits.

One listing call per subreddit, all issued together. A subreddit that fails
or returns an unexpected shape contributes nothing; the rest are merged in
configured subreddit order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from feedgate.aggregators.base import aggregate
from feedgate.fanout import gather_settled

if TYPE_CHECKING:
    from feedgate.state import AppState

SOURCE = "reddit"


async def get_forum_posts(state: AppState) -> list[dict[str, Any]]:
    settings = state.settings.sources.reddit
    return await aggregate(
        state,
        source=SOURCE,
        collect=lambda: _collect(state),
        ttl_seconds=settings.ttl_seconds,
        max_items=settings.max_items,
    )


async def _collect(state: AppState) -> list[dict[str, Any]]:
    channels = state.settings.sources.reddit.channels
    per_channel = await gather_settled(
        [(channel, _fetch_channel(state, channel)) for channel in channels],
        default=list,
        source=SOURCE,
    )
    return [post for posts in per_channel for post in posts]


async def _fetch_channel(state: AppState, channel: str) -> list[dict[str, Any]]:
    settings = state.settings.sources.reddit
    listing = await state.fetcher.get_json(
        f"{settings.base_url}/r/{channel}/hot.json",
        source=SOURCE,
        params={"limit": settings.per_channel_limit},
    )
    # KeyError / TypeError on a malformed listing is absorbed by the fan-out
    return [
        {**child["data"], "subreddit_name": channel} for child in listing["data"]["children"]
    ]
