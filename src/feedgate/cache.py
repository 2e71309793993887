"""In-memory TTL cache shared by all aggregators.

One entry per logical source key (``news``, ``github``, ``reddit``,
``research``). Expiry is enforced lazily on read: an entry whose
``expires_at`` has passed is reported as a miss even if the background
sweeper has not removed it yet.

Writes replace the whole ``CacheEntry`` object in a single dict assignment.
All access happens on the event loop thread, so a reader sees either the
previous entry or the new one, never a mix. Concurrent writers to the same
key are last-write-wins.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import structlog

from feedgate.models.cache import CacheEntry

if TYPE_CHECKING:
    from collections.abc import Callable

log = structlog.get_logger()


class Cache:
    """Process-local TTL cache implementing CacheProtocol.

    Created once at startup (inside the server lifespan) and held by AppState.
    Never reset except by expiry.
    """

    def __init__(
        self,
        default_ttl_seconds: int = 300,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def default_ttl_seconds(self) -> int:
        return self._default_ttl_seconds

    def get(self, key: str) -> Any | None:
        """Return the live value for ``key``, or ``None`` on miss or expiry."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            log.debug("cache_entry_expired", key=key)
            return None
        return entry.value

    def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        """Store ``value`` under ``key``, replacing any prior entry and its TTL."""
        ttl = self._default_ttl_seconds if ttl_seconds is None else ttl_seconds
        now = self._clock()
        self._entries[key] = CacheEntry(value=value, stored_at=now, expires_at=now + ttl)
        log.debug("cache_set", key=key, ttl_seconds=ttl)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def sweep_expired(self) -> int:
        """Drop every expired entry. Returns the number removed."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            log.info("cache_sweep_complete", removed=len(expired), remaining=len(self._entries))
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
