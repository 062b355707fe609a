from __future__ import annotations

from datetime import datetime
from functools import partial

from fixture_feed.core.config import Settings
from fixture_feed.feed.models import CalendarEvent
from fixture_feed.ingestion.providers.base.client import BaseHttpClient
from fixture_feed.ingestion.providers.base.registry import FeedSource, SourceRegistry
from fixture_feed.ingestion.providers.base.types import ClubConfig, ClubFixtures, CombatScoreboard
from fixture_feed.ingestion.providers.espn.adapters.club import ClubAdapter
from fixture_feed.ingestion.providers.espn.adapters.ufc import CombatSportsAdapter
from fixture_feed.ingestion.providers.espn.client import EspnClient, ufc_scoreboard_url
from fixture_feed.ingestion.providers.espn.clubs import default_clubs
from fixture_feed.ingestion.providers.espn.parser import normalize_club_fixtures, normalize_ufc_events


def _club_normalizer(club: ClubConfig, payload: ClubFixtures, now: datetime) -> list[CalendarEvent]:
    return normalize_club_fixtures(payload, club, now=now)


def _ufc_normalizer(payload: CombatScoreboard, now: datetime) -> list[CalendarEvent]:
    return normalize_ufc_events(payload, now=now)


def register_espn_sources(
    registry: SourceRegistry,
    *,
    http: BaseHttpClient,
    settings: Settings,
    clubs: tuple[ClubConfig, ...] | None = None,
) -> None:
    client = EspnClient(http=http)

    for club in clubs if clubs is not None else default_clubs(settings.espn_base_url):
        registry.register(
            FeedSource(
                adapter=ClubAdapter.for_club(client, club),
                normalize=partial(_club_normalizer, club),
            )
        )

    registry.register(
        FeedSource(
            adapter=CombatSportsAdapter(
                client=client, url=ufc_scoreboard_url(settings.espn_base_url)
            ),
            normalize=_ufc_normalizer,
        )
    )
