from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from fixture_feed.core.config import Settings
from fixture_feed.feed.enums import SourceEnum
from fixture_feed.feed.models import CalendarEvent
from fixture_feed.ingestion.dates import utc_now
from fixture_feed.ingestion.providers.base.client import BaseHttpClient
from fixture_feed.ingestion.providers.base.registry import FeedSource, SourceRegistry
from fixture_feed.ingestion.providers.espn.provider import register_espn_sources
from fixture_feed.ingestion.providers.liquipedia.provider import register_liquipedia_sources

LOGGER = logging.getLogger(__name__)


def format_failure_reason(exc: BaseException, *, max_len: int = 300) -> str:
    msg = str(exc).strip() or exc.__class__.__name__
    reason = f"{exc.__class__.__name__}: {msg}"
    if len(reason) > max_len:
        return f"{reason[: max_len - 1]}…"
    return reason


def merge_events(*lists: Iterable[CalendarEvent]) -> dict[str, CalendarEvent]:
    """Keyed by id; an entry from a later list replaces an earlier one."""

    merged: dict[str, CalendarEvent] = {}
    for events in lists:
        for event in events:
            merged[event.id] = event
    return merged


def sort_events(events: Iterable[CalendarEvent]) -> list[CalendarEvent]:
    return sorted(events, key=lambda e: e.sort_key)


@dataclass(frozen=True)
class AggregationResult:
    """
    One aggregation cycle. `failures` maps each source whose fetch raised to a
    short reason; those sources contributed nothing.
    """

    events: tuple[CalendarEvent, ...]
    failures: dict[SourceEnum, str] = field(default_factory=dict)
    generated_at: datetime = field(default_factory=utc_now)

    @property
    def degraded(self) -> bool:
        return bool(self.failures)

    def public_events(self) -> list[dict[str, object]]:
        return [e.to_public_dict() for e in self.events]

    def full_events(self) -> list[dict[str, object]]:
        return [e.to_full_dict() for e in self.events]


class Aggregator:
    """Runs every source concurrently, then merges by id and sorts."""

    def __init__(self, sources: Sequence[FeedSource]) -> None:
        self.sources = list(sources)

    async def _collect(self, feed_source: FeedSource, now: datetime) -> list[CalendarEvent]:
        raw = await feed_source.adapter.fetch_raw()
        return feed_source.normalize(raw, now)

    async def aggregate(self, now: datetime | None = None) -> AggregationResult:
        now = now or utc_now()

        outcomes = await asyncio.gather(
            *(self._collect(s, now) for s in self.sources),
            return_exceptions=True,
        )

        collected: list[list[CalendarEvent]] = []
        failures: dict[SourceEnum, str] = {}
        for feed_source, outcome in zip(self.sources, outcomes):
            if isinstance(outcome, Exception):
                reason = format_failure_reason(outcome)
                LOGGER.warning("source %s failed: %s", feed_source.source, reason)
                failures[feed_source.source] = reason
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            LOGGER.debug("source %s contributed %d events", feed_source.source, len(outcome))
            collected.append(outcome)

        events = sort_events(merge_events(*collected).values())
        LOGGER.info(
            "aggregated %d events from %d/%d sources",
            len(events),
            len(self.sources) - len(failures),
            len(self.sources),
        )
        return AggregationResult(events=tuple(events), failures=failures, generated_at=now)


def build_default_registry(http: BaseHttpClient, settings: Settings) -> SourceRegistry:
    registry = SourceRegistry()
    register_espn_sources(registry, http=http, settings=settings)
    register_liquipedia_sources(registry, http=http, settings=settings)
    return registry


def build_default_aggregator(http: BaseHttpClient, settings: Settings) -> Aggregator:
    return Aggregator(build_default_registry(http, settings).all())
