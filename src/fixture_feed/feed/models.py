from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from fixture_feed.feed.enums import OutcomeEnum, SourceEnum
from fixture_feed.ingestion.dates import iso_z

# Internal-only fields removed from the public feed shape.
EXTENDED_FIELDS: frozenset[str] = frozenset({"venue", "location", "status", "subtitle"})


@dataclass(frozen=True)
class CalendarEvent:
    """
    Canonical, source-agnostic event record produced by every normalizer.

    `id` is `{source}-{provider id or fallback}` and stays stable across fetches
    of the same underlying event.
    """

    id: str
    source: SourceEnum
    title: str
    start_time: datetime
    competition: str | None = None
    fighters: str | None = None
    result: str | None = None
    outcome: OutcomeEnum | None = None

    venue: str | None = None
    location: str | None = None
    status: str | None = None
    subtitle: str | None = None
    url: str | None = None

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError(f"CalendarEvent {self.id!r} requires a non-empty title")
        if self.start_time.tzinfo is None:
            raise ValueError(f"CalendarEvent {self.id!r} requires a tz-aware start_time")

    @property
    def start_time_utc(self) -> str:
        return iso_z(self.start_time)

    @property
    def sort_key(self) -> tuple[datetime, int]:
        return self.start_time, self.source.priority

    def to_full_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "source": self.source.value,
            "title": self.title,
            "competition": self.competition,
            "fighters": self.fighters,
            "startTimeUTC": self.start_time_utc,
            "result": self.result,
            "outcome": self.outcome.value if self.outcome else None,
            "venue": self.venue,
            "location": self.location,
            "status": self.status,
            "subtitle": self.subtitle,
            "url": self.url,
        }
        return {k: v for k, v in data.items() if v is not None}

    def to_public_dict(self) -> dict[str, Any]:
        return {k: v for k, v in self.to_full_dict().items() if k not in EXTENDED_FIELDS}
