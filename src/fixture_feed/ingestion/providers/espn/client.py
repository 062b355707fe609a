from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from fixture_feed.ingestion.dates import DEFAULT_WINDOW, EventWindow, utc_now
from fixture_feed.ingestion.providers.base.client import BaseHttpClient

ApiItem = dict[str, Any]

SOCCER_SCOREBOARD_LIMIT = 200
UFC_SCOREBOARD_LIMIT = 50


def team_schedule_url(base_url: str, league: str, team_id: str) -> str:
    return f"{base_url.rstrip('/')}/soccer/{league}/teams/{team_id}/schedule"


def soccer_scoreboard_url(base_url: str, league: str) -> str:
    return f"{base_url.rstrip('/')}/soccer/{league}/scoreboard"


def ufc_scoreboard_url(base_url: str) -> str:
    return f"{base_url.rstrip('/')}/mma/ufc/scoreboard"


def _event_items(payload: dict[str, Any]) -> list[ApiItem]:
    events = payload.get("events")
    if not isinstance(events, list):
        return []
    return [e for e in events if isinstance(e, dict)]


@dataclass
class EspnClient:
    """Thin wrapper over the ESPN site API (schedules and date-windowed scoreboards)."""

    http: BaseHttpClient
    window: EventWindow = DEFAULT_WINDOW
    _now: Any = field(default=utc_now, repr=False)

    def scoreboard_params(self, limit: int, now: datetime | None = None) -> dict[str, str]:
        return {
            "limit": str(limit),
            "dates": self.window.dates_param(now or self._now()),
        }

    async def get_schedule_events(self, url: str) -> list[ApiItem]:
        payload = await self.http.get_json(url)
        return _event_items(payload)

    async def get_scoreboard_events(self, url: str, *, limit: int) -> list[ApiItem]:
        payload = await self.http.get_json(url, params=self.scoreboard_params(limit))
        return _event_items(payload)
