from __future__ import annotations

from feedgate.models.cache import CacheEntry
from feedgate.models.items import (
    ChatReply,
    ChatRequest,
    Community,
    PreprintRecord,
    QuizQuestion,
)

__all__ = [
    # cache
    "CacheEntry",
    # aggregated items
    "PreprintRecord",
    # static catalog
    "Community",
    "QuizQuestion",
    # chat
    "ChatRequest",
    "ChatReply",
]
