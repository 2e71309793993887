from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class CacheEntry(BaseModel):
    """A cached aggregation result for one source key."""

    model_config = ConfigDict(frozen=True)

    value: Any  # Stored as-is, never copied or validated
    stored_at: float  # Cache clock reading at write time
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at
