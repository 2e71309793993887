"""Latest arXiv submissions across a fixed set of categories.

One Atom query per category, all issued together, each response run through
the tolerant entry extractor. A failed category contributes nothing.
Untitled records are dropped after the merge.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from feedgate.aggregators.base import aggregate
from feedgate.fanout import gather_settled
from feedgate.parser import extract_entries

if TYPE_CHECKING:
    from feedgate.models.items import PreprintRecord
    from feedgate.state import AppState

SOURCE = "research"


async def get_preprints(state: AppState) -> list[PreprintRecord]:
    settings = state.settings.sources.research
    return await aggregate(
        state,
        source=SOURCE,
        collect=lambda: _collect(state),
        ttl_seconds=settings.ttl_seconds,
        max_items=settings.max_items,
    )


async def _collect(state: AppState) -> list[PreprintRecord]:
    categories = state.settings.sources.research.categories
    per_category = await gather_settled(
        [(category, _fetch_category(state, category)) for category in categories],
        default=list,
        source=SOURCE,
    )
    return [record for records in per_category for record in records if record.title]


async def _fetch_category(state: AppState, category: str) -> list[PreprintRecord]:
    settings = state.settings.sources.research
    text = await state.fetcher.get_text(
        settings.query_url,
        source=SOURCE,
        params={
            "search_query": f"cat:{category}",
            "start": 0,
            "max_results": settings.per_category_limit,
            "sortBy": "submittedDate",
            "sortOrder": "descending",
        },
    )
    return extract_entries(text, category)
