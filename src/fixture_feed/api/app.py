from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fixture_feed.cli.common import feed_service_scope
from fixture_feed.core.config import Settings, settings as default_settings
from fixture_feed.core.logging_config import configure_logging
from fixture_feed.feed.service import EventFeedService
from fixture_feed.feed.tournaments import build_tournament_digests

LOGGER = logging.getLogger(__name__)

# Transport-level cache for the public feed.
EVENTS_MAX_AGE_S = 30 * 60

_ERROR_PAYLOAD = {"error": "Failed to load events"}


def create_app(
    service: EventFeedService | None = None,
    *,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Build the HTTP delivery surface. Without an injected `service`, the
    lifespan owns an HTTP client and a default feed service.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if service is not None:
            app.state.feed_service = service
            yield
            return

        async with feed_service_scope(settings) as owned:
            app.state.feed_service = owned
            yield

    app = FastAPI(title="Fixture Fusion feed", lifespan=lifespan)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/events")
    async def events(request: Request) -> JSONResponse:
        feed: EventFeedService = request.app.state.feed_service
        try:
            payload = {"events": await feed.get_public_events()}
        except Exception:
            LOGGER.exception("Failed to load calendar events")
            return JSONResponse(_ERROR_PAYLOAD, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return JSONResponse(
            payload,
            headers={"Cache-Control": f"public, max-age={EVENTS_MAX_AGE_S}"},
        )

    @app.get("/api/tournaments")
    async def tournaments(request: Request) -> JSONResponse:
        feed: EventFeedService = request.app.state.feed_service
        try:
            digests = build_tournament_digests(await feed.get_events())
        except Exception:
            LOGGER.exception("Failed to build tournament digests")
            return JSONResponse(_ERROR_PAYLOAD, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return JSONResponse(
            {"tournaments": [d.to_dict() for d in digests]},
            headers={"Cache-Control": f"public, max-age={EVENTS_MAX_AGE_S}"},
        )

    return app


def create_default_app() -> FastAPI:
    configure_logging(default_settings.log_level)
    return create_app()
