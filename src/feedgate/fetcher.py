"""HTTP fetcher for upstream content APIs.

All network I/O goes through a single Fetcher instance shared across
requests. The Fetcher receives an httpx.AsyncClient via constructor
injection; the lifespan owns the client lifecycle.

Every failure mode (transport error, non-2xx status, undecodable JSON) is
reported as ``UpstreamFetchError`` so aggregators only handle one type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import structlog

from feedgate import __version__
from feedgate.errors import ErrorCode, UpstreamFetchError

if TYPE_CHECKING:
    from feedgate.config import FetcherSettings

log = structlog.get_logger()

USER_AGENT = f"feedgate/{__version__}"


def build_http_client(settings: FetcherSettings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={"User-Agent": USER_AGENT},
        limits=httpx.Limits(
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_keepalive_connections,
        ),
    )


class Fetcher:
    """Single-attempt upstream fetcher. No retries."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def _get(
        self,
        url: str,
        *,
        source: str,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
    ) -> httpx.Response:
        try:
            response = await self._client.get(url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            raise UpstreamFetchError(
                source,
                f"Network error fetching {url}: {exc}",
            ) from exc

        if not response.is_success:
            raise UpstreamFetchError(
                source,
                f"HTTP {response.status_code} fetching {url}",
                # 4xx usually means the request itself is wrong or rate limited
                recoverable=response.status_code >= 500 or response.status_code == 429,
            )

        log.debug(
            "fetch_complete",
            source=source,
            url=str(response.url),
            status_code=response.status_code,
            content_length=len(response.content),
        )
        return response

    async def get_json(
        self,
        url: str,
        *,
        source: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET ``url`` and decode the body as JSON."""
        response = await self._get(url, source=source, params=params, headers=headers)
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamFetchError(
                source,
                f"Invalid JSON from {url}: {exc}",
                code=ErrorCode.UPSTREAM_BAD_RESPONSE,
            ) from exc

    async def get_text(
        self,
        url: str,
        *,
        source: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """GET ``url`` and return the decoded body text."""
        response = await self._get(url, source=source, params=params, headers=headers)
        return response.text
