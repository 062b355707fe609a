from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from fixture_feed.feed.enums import SourceEnum
from fixture_feed.feed.models import CalendarEvent
from fixture_feed.ingestion.dates import iso_z, utc_now

FALLBACK_TOURNAMENT = "Untitled tournament"


@dataclass(frozen=True)
class TournamentDigest:
    source: SourceEnum
    name: str
    event_count: int
    next_start: datetime | None
    last_start: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source.value,
            "name": self.name,
            "eventCount": self.event_count,
            "nextDateUTC": iso_z(self.next_start) if self.next_start else None,
            "lastDateUTC": iso_z(self.last_start),
        }


def tournament_name(event: CalendarEvent) -> str:
    competition = (event.competition or "").strip()
    if competition:
        return competition
    # UFC cards are their own tournaments.
    if event.source is SourceEnum.UFC and event.title:
        return event.title
    return FALLBACK_TOURNAMENT


def build_tournament_digests(
    events: Iterable[CalendarEvent],
    *,
    now: datetime | None = None,
) -> list[TournamentDigest]:
    """
    Group events per (source, tournament) with the count, the next upcoming
    start (>= now) and the latest start. Ordered by source priority, then by
    next-or-last date.
    """
    now = now or utc_now()

    counts: dict[tuple[SourceEnum, str], int] = {}
    upcoming: dict[tuple[SourceEnum, str], datetime] = {}
    latest: dict[tuple[SourceEnum, str], datetime] = {}

    for event in events:
        key = (event.source, tournament_name(event))
        counts[key] = counts.get(key, 0) + 1

        if key not in latest or event.start_time > latest[key]:
            latest[key] = event.start_time

        if event.start_time >= now and (key not in upcoming or event.start_time < upcoming[key]):
            upcoming[key] = event.start_time

    digests = [
        TournamentDigest(
            source=source,
            name=name,
            event_count=count,
            next_start=upcoming.get((source, name)),
            last_start=latest[(source, name)],
        )
        for (source, name), count in counts.items()
    ]

    return sorted(
        digests,
        key=lambda d: (d.source.priority, d.next_start or d.last_start),
    )
