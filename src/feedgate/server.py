"""HTTP gateway entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the Starlette lifespan context manager
- Register routes and map errors to the JSON envelope
- Start uvicorn
"""

from __future__ import annotations

import asyncio
import logging
import sys
from contextlib import asynccontextmanager, suppress
from typing import TYPE_CHECKING, Any

import structlog
import uvicorn
from pydantic import BaseModel
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Route

from feedgate import __version__
from feedgate.aggregators import (
    get_forum_posts,
    get_news,
    get_preprints,
    get_trending_repositories,
)
from feedgate.cache import Cache
from feedgate.catalog import COMMUNITIES, QUIZ_QUESTIONS, reply_to
from feedgate.config import Settings
from feedgate.errors import ErrorCode, FeedgateError
from feedgate.fetcher import Fetcher, build_http_client
from feedgate.models.items import ChatRequest
from feedgate.schedulers import run_cache_sweep_scheduler
from feedgate.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from starlette.requests import Request

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


def build_state(settings: Settings) -> AppState:
    """Create the shared HTTP client, cache and fetcher."""
    http_client = build_http_client(settings.fetcher)
    return AppState(
        settings=settings,
        cache=Cache(settings.cache.default_ttl_seconds),
        fetcher=Fetcher(http_client),
        http_client=http_client,
    )


def _state(request: Request) -> AppState:
    return request.app.state.feedgate


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

ENDPOINTS: dict[str, str] = {
    "news": "/api/news",
    "github": "/api/github",
    "reddit": "/api/reddit",
    "research": "/api/research",
    "communities": "/api/communities",
    "quiz": "/api/quiz",
    "chat": "/api/chat",
}


def _jsonable(items: list[Any]) -> list[Any]:
    return [item.model_dump(mode="json") if isinstance(item, BaseModel) else item for item in items]


async def index(request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "status": "online",
            "message": "feedgate aggregation gateway",
            "version": __version__,
            "endpoints": ENDPOINTS,
        }
    )


def _source_route(
    source: str, get_items: Callable[[AppState], Awaitable[list[Any]]]
) -> Callable[[Request], Awaitable[JSONResponse]]:
    async def endpoint(request: Request) -> JSONResponse:
        try:
            items = await get_items(_state(request))
        except FeedgateError:
            raise  # Rendered by _handle_feedgate_error
        except Exception:
            log.error("route_unexpected_error", source=source, exc_info=True)
            raise
        return JSONResponse(_jsonable(items))

    endpoint.__name__ = f"get_{source}"
    return endpoint


async def communities(request: Request) -> JSONResponse:
    return JSONResponse(_jsonable(COMMUNITIES))


async def quiz(request: Request) -> JSONResponse:
    return JSONResponse(_jsonable(QUIZ_QUESTIONS))


async def chat(request: Request) -> JSONResponse:
    try:
        chat_request = ChatRequest.model_validate(await request.json())
    except ValueError as exc:
        # Covers both undecodable JSON and pydantic.ValidationError
        raise FeedgateError(
            code=ErrorCode.INVALID_INPUT,
            message=f"Invalid chat request: {exc}",
            suggestion="Send a JSON body with a non-empty 'message' and an optional 'room'.",
            recoverable=False,
        ) from exc
    return JSONResponse(reply_to(chat_request).model_dump(mode="json"))


async def _handle_feedgate_error(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, FeedgateError)
    log.warning(
        "request_error",
        path=request.url.path,
        code=exc.code,
        message=exc.message,
        recoverable=exc.recoverable,
    )
    status_code = 400 if exc.code == ErrorCode.INVALID_INPUT else 500
    return JSONResponse(exc.to_dict(), status_code=status_code)


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def create_app(state: AppState | None = None, settings: Settings | None = None) -> Starlette:
    """Build the gateway application.

    When ``state`` is given it is used as-is and its HTTP client is left
    open on shutdown; otherwise the lifespan builds and owns everything.
    """
    if settings is None:
        settings = state.settings if state is not None else Settings()

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncGenerator[None, None]:
        owned = state is None
        if owned:
            _setup_logging(settings)
            app.state.feedgate = build_state(settings)
        current: AppState = app.state.feedgate

        log.info("server_starting", version=__version__, port=settings.server.port)
        sweep_task = asyncio.create_task(run_cache_sweep_scheduler(current))

        try:
            yield
        finally:
            sweep_task.cancel()
            with suppress(asyncio.CancelledError):
                await sweep_task
            if owned and current.http_client is not None:
                await current.http_client.aclose()
            log.info("server_stopping")

    app = Starlette(
        routes=[
            Route("/", index),
            Route(ENDPOINTS["news"], _source_route("news", get_news)),
            Route(ENDPOINTS["github"], _source_route("github", get_trending_repositories)),
            Route(ENDPOINTS["reddit"], _source_route("reddit", get_forum_posts)),
            Route(ENDPOINTS["research"], _source_route("research", get_preprints)),
            Route(ENDPOINTS["communities"], communities),
            Route(ENDPOINTS["quiz"], quiz),
            Route(ENDPOINTS["chat"], chat, methods=["POST"]),
        ],
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=settings.server.cors_origins,
                allow_methods=["*"],
                allow_headers=["*"],
            )
        ],
        exception_handlers={FeedgateError: _handle_feedgate_error},
        lifespan=lifespan,
    )
    if state is not None:
        app.state.feedgate = state
    return app


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()
    _setup_logging(settings)
    uvicorn.run(
        create_app(settings=settings),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # Disable uvicorn's default logging; structlog handles it
    )


if __name__ == "__main__":
    main()
