from __future__ import annotations

from dataclasses import dataclass

from fixture_feed.feed.enums import SourceEnum
from fixture_feed.ingestion.providers.base.types import CombatScoreboard
from fixture_feed.ingestion.providers.espn.client import UFC_SCOREBOARD_LIMIT, EspnClient


@dataclass(frozen=True)
class CombatSportsAdapter:
    """UFC scoreboard, one request per cycle over the default window."""

    client: EspnClient
    url: str
    source: SourceEnum = SourceEnum.UFC

    async def fetch_raw(self) -> CombatScoreboard:
        events = await self.client.get_scoreboard_events(self.url, limit=UFC_SCOREBOARD_LIMIT)
        return CombatScoreboard(events=events)
