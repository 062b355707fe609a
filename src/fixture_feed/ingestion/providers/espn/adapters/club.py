from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from functools import partial
from typing import Any

from fixture_feed.feed.enums import SourceEnum
from fixture_feed.ingestion.providers.base.errors import ProviderError
from fixture_feed.ingestion.providers.base.fallback import first_accepted
from fixture_feed.ingestion.providers.base.types import ClubConfig, ClubFixtures
from fixture_feed.ingestion.providers.espn.client import SOCCER_SCOREBOARD_LIMIT, EspnClient

ApiItem = dict[str, Any]

LOGGER = logging.getLogger(__name__)


def _lists_team(event: ApiItem, team_id: str) -> bool:
    competitions = event.get("competitions")
    if not isinstance(competitions, list) or not competitions:
        return False
    competition = competitions[0]
    if not isinstance(competition, dict):
        return False
    competitors = competition.get("competitors")
    if not isinstance(competitors, list):
        return False
    for competitor in competitors:
        if not isinstance(competitor, dict):
            continue
        team = competitor.get("team")
        if isinstance(team, dict) and str(team.get("id")) == team_id:
            return True
    return False


@dataclass(frozen=True)
class ClubScheduleAdapter:
    """
    Team schedule with league fallback: first endpoint with at least one event
    wins, otherwise the last successful (empty) response.
    """

    client: EspnClient
    club: ClubConfig

    @property
    def source(self) -> SourceEnum:
        return self.club.source

    async def fetch_events(self) -> list[ApiItem]:
        attempts = [
            partial(self.client.get_schedule_events, url) for url in self.club.schedule_endpoints
        ]
        return await first_accepted(attempts, accept=lambda events: len(events) > 0)


@dataclass(frozen=True)
class ClubScoreboardAdapter:
    """
    League-wide scoreboards within the default window, filtered to fixtures
    listing the club. Endpoint failures are tolerated unless nothing was
    collected.
    """

    client: EspnClient
    club: ClubConfig

    @property
    def source(self) -> SourceEnum:
        return self.club.source

    async def fetch_events(self) -> list[ApiItem]:
        aggregated: list[ApiItem] = []
        last_error: ProviderError | None = None

        for url in self.club.scoreboard_endpoints:
            try:
                events = await self.client.get_scoreboard_events(url, limit=SOCCER_SCOREBOARD_LIMIT)
            except ProviderError as exc:
                LOGGER.warning("%s scoreboard %s failed: %s", self.club.source, url, exc)
                last_error = exc
                continue
            aggregated.extend(e for e in events if _lists_team(e, self.club.team_id))

        if not aggregated and last_error is not None:
            raise last_error
        return aggregated


@dataclass(frozen=True)
class ClubAdapter:
    """
    Schedule and scoreboard collection for one club, run concurrently.

    A failed half is logged and treated as empty; only when both fail does
    the schedule error propagate.
    """

    schedule: ClubScheduleAdapter
    scoreboard: ClubScoreboardAdapter

    @classmethod
    def for_club(cls, client: EspnClient, club: ClubConfig) -> ClubAdapter:
        return cls(
            schedule=ClubScheduleAdapter(client=client, club=club),
            scoreboard=ClubScoreboardAdapter(client=client, club=club),
        )

    @property
    def source(self) -> SourceEnum:
        return self.schedule.club.source

    async def fetch_raw(self) -> ClubFixtures:
        schedule, scoreboard = await asyncio.gather(
            self.schedule.fetch_events(),
            self.scoreboard.fetch_events(),
            return_exceptions=True,
        )

        for value in (schedule, scoreboard):
            if isinstance(value, BaseException) and not isinstance(value, ProviderError):
                raise value

        if isinstance(schedule, ProviderError) and isinstance(scoreboard, ProviderError):
            raise schedule
        if isinstance(schedule, ProviderError):
            LOGGER.warning("%s schedule unavailable: %s", self.source, schedule)
            schedule = []
        if isinstance(scoreboard, ProviderError):
            LOGGER.warning("%s scoreboard unavailable: %s", self.source, scoreboard)
            scoreboard = []

        return ClubFixtures(source=self.source, schedule=schedule, scoreboard=scoreboard)
