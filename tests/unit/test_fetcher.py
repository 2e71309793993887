"""Unit tests for feedgate.fetcher."""

from __future__ import annotations

import httpx
import pytest
import respx

from feedgate.config import FetcherSettings
from feedgate.errors import ErrorCode, UpstreamFetchError
from feedgate.fetcher import USER_AGENT, Fetcher, build_http_client

# ---------------------------------------------------------------------------
# build_http_client
# ---------------------------------------------------------------------------


class TestBuildHttpClient:
    async def test_client_configuration(self) -> None:
        client = build_http_client(FetcherSettings(timeout_seconds=12.5))
        try:
            assert isinstance(client, httpx.AsyncClient)
            # arXiv and Reddit both redirect, so redirects are followed
            assert client.follow_redirects is True
            assert client.headers["User-Agent"] == USER_AGENT
            assert client.timeout.read == 12.5
        finally:
            await client.aclose()

    def test_user_agent_names_the_project(self) -> None:
        assert USER_AGENT.startswith("feedgate/")


# ---------------------------------------------------------------------------
# Fetcher
# ---------------------------------------------------------------------------

URL = "https://api.example.com/items.json"


class TestGetJson:
    @respx.mock
    async def test_decodes_json(self) -> None:
        respx.get(URL).mock(return_value=httpx.Response(200, json=[1, 2, 3]))
        async with httpx.AsyncClient() as client:
            assert await Fetcher(client).get_json(URL, source="news") == [1, 2, 3]

    @respx.mock
    async def test_passes_params_and_headers(self) -> None:
        route = respx.get(URL).mock(return_value=httpx.Response(200, json={}))
        async with httpx.AsyncClient() as client:
            await Fetcher(client).get_json(
                URL,
                source="github",
                params={"q": "created:>2026-10-12", "per_page": 100},
                headers={"Accept": "application/vnd.github.v3+json"},
            )
        request = route.calls.last.request
        assert request.url.params["q"] == "created:>2026-10-12"
        assert request.url.params["per_page"] == "100"
        assert request.headers["Accept"] == "application/vnd.github.v3+json"

    @respx.mock
    async def test_json_null_is_returned_as_none(self) -> None:
        respx.get(URL).mock(return_value=httpx.Response(200, text="null"))
        async with httpx.AsyncClient() as client:
            assert await Fetcher(client).get_json(URL, source="news") is None

    @respx.mock
    async def test_invalid_json_raises_bad_response(self) -> None:
        respx.get(URL).mock(return_value=httpx.Response(200, text="<html>oops</html>"))
        async with httpx.AsyncClient() as client:
            with pytest.raises(UpstreamFetchError) as exc_info:
                await Fetcher(client).get_json(URL, source="reddit")
        assert exc_info.value.code == ErrorCode.UPSTREAM_BAD_RESPONSE
        assert exc_info.value.source == "reddit"


class TestErrors:
    @respx.mock
    async def test_404_is_not_recoverable(self) -> None:
        respx.get(URL).mock(return_value=httpx.Response(404))
        async with httpx.AsyncClient() as client:
            with pytest.raises(UpstreamFetchError) as exc_info:
                await Fetcher(client).get_json(URL, source="news")
        assert exc_info.value.code == ErrorCode.UPSTREAM_FETCH_FAILED
        assert exc_info.value.recoverable is False
        assert "HTTP 404" in exc_info.value.message

    @respx.mock
    async def test_503_is_recoverable(self) -> None:
        respx.get(URL).mock(return_value=httpx.Response(503))
        async with httpx.AsyncClient() as client:
            with pytest.raises(UpstreamFetchError) as exc_info:
                await Fetcher(client).get_text(URL, source="research")
        assert exc_info.value.recoverable is True

    @respx.mock
    async def test_rate_limited_is_recoverable(self) -> None:
        respx.get(URL).mock(return_value=httpx.Response(429))
        async with httpx.AsyncClient() as client:
            with pytest.raises(UpstreamFetchError) as exc_info:
                await Fetcher(client).get_json(URL, source="github")
        assert exc_info.value.recoverable is True

    @respx.mock
    async def test_network_error(self) -> None:
        respx.get(URL).mock(side_effect=httpx.ConnectError("connection refused"))
        async with httpx.AsyncClient() as client:
            with pytest.raises(UpstreamFetchError) as exc_info:
                await Fetcher(client).get_json(URL, source="news")
        assert "Network error" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @respx.mock
    async def test_timeout(self) -> None:
        respx.get(URL).mock(side_effect=httpx.ReadTimeout("timed out"))
        async with httpx.AsyncClient() as client:
            with pytest.raises(UpstreamFetchError):
                await Fetcher(client).get_text(URL, source="research")

    def test_error_envelope(self) -> None:
        exc = UpstreamFetchError("github", "HTTP 503 fetching x")
        payload = exc.to_dict()
        assert payload["error"]["code"] == ErrorCode.UPSTREAM_FETCH_FAILED
        assert payload["error"]["source"] == "github"
        assert payload["error"]["message"] == "HTTP 503 fetching x"
        assert payload["error"]["recoverable"] is True


class TestGetText:
    @respx.mock
    async def test_returns_body_text(self) -> None:
        respx.get(URL).mock(return_value=httpx.Response(200, text="<feed></feed>"))
        async with httpx.AsyncClient() as client:
            assert await Fetcher(client).get_text(URL, source="research") == "<feed></feed>"
