"""Application state container.

AppState is created once at server startup (inside the Starlette lifespan
context manager) and passed to every aggregator. It is the only owner of the
shared cache, so there is no module-level cache singleton.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from feedgate.config import Settings
    from feedgate.protocols import CacheProtocol, FetcherProtocol


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every aggregator."""

    settings: Settings
    cache: CacheProtocol
    fetcher: FetcherProtocol
    http_client: httpx.AsyncClient | None = None
