from __future__ import annotations

from datetime import datetime

from fixture_feed.core.config import Settings
from fixture_feed.feed.models import CalendarEvent
from fixture_feed.ingestion.providers.base.client import BaseHttpClient
from fixture_feed.ingestion.providers.base.registry import FeedSource, SourceRegistry
from fixture_feed.ingestion.providers.base.types import RosterPage
from fixture_feed.ingestion.providers.liquipedia.adapter import RosterPageAdapter
from fixture_feed.ingestion.providers.liquipedia.client import LiquipediaClient
from fixture_feed.ingestion.providers.liquipedia.parser import normalize_legacy_matches


def register_liquipedia_sources(
    registry: SourceRegistry,
    *,
    http: BaseHttpClient,
    settings: Settings,
) -> None:
    client = LiquipediaClient(http=http, api_url=settings.liquipedia_api_url)
    base_url = settings.liquipedia_base_url
    roster_name = settings.liquipedia_page

    def normalize(payload: RosterPage, now: datetime) -> list[CalendarEvent]:
        return normalize_legacy_matches(
            payload, now=now, roster_name=roster_name, base_url=base_url
        )

    registry.register(
        FeedSource(
            adapter=RosterPageAdapter(client=client, page=settings.liquipedia_page),
            normalize=normalize,
        )
    )
