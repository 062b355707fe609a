from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fixture_feed.core.config import Settings, settings as default_settings
from fixture_feed.feed.aggregator import build_default_aggregator
from fixture_feed.feed.service import EventFeedService
from fixture_feed.ingestion.providers.base.client import BaseHttpClient


@asynccontextmanager
async def feed_service_scope(settings: Settings | None = None) -> AsyncIterator[EventFeedService]:
    """
    Context-managed feed service wired to every default source.
    Ensures the shared HTTP client is closed.
    """
    settings = settings or default_settings
    http = BaseHttpClient(
        user_agent=settings.user_agent,
        timeout_s=settings.http_timeout_s,
        connect_timeout_s=settings.http_connect_timeout_s,
    )
    try:
        yield EventFeedService(
            aggregator=build_default_aggregator(http, settings),
            ttl_s=settings.feed_cache_ttl_s,
            require_all_sources=settings.feed_require_all_sources,
        )
    finally:
        await http.aclose()
