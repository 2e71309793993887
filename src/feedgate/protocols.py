"""Protocol interfaces for swappable components.

Aggregators and AppState reference these protocols, not the concrete
implementations. This allows:
- Tests to use lightweight in-memory implementations
- Future backends (e.g. Redis cache) to be swapped without changing aggregator code
"""

from __future__ import annotations

from typing import Any, Protocol


class CacheProtocol(Protocol):
    """Interface for the aggregation result cache."""

    @property
    def default_ttl_seconds(self) -> int: ...

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None: ...

    def delete(self, key: str) -> None: ...

    def sweep_expired(self) -> int: ...


class FetcherProtocol(Protocol):
    """Interface for the upstream HTTP fetcher."""

    async def get_json(
        self,
        url: str,
        *,
        source: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any: ...

    async def get_text(
        self,
        url: str,
        *,
        source: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> str: ...
