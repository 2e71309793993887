from __future__ import annotations

from feedgate.aggregators.github import get_trending_repositories
from feedgate.aggregators.news import get_news
from feedgate.aggregators.reddit import get_forum_posts
from feedgate.aggregators.research import get_preprints

__all__ = [
    "get_news",
    "get_trending_repositories",
    "get_forum_posts",
    "get_preprints",
]
