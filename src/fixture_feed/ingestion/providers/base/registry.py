from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from fixture_feed.feed.enums import SourceEnum
from fixture_feed.feed.models import CalendarEvent

from .adapter import SourceAdapter
from .types import RawPayload

Normalizer = Callable[[RawPayload, datetime], list[CalendarEvent]]


@dataclass(frozen=True)
class FeedSource:
    """An adapter paired with the normalizer that understands its raw payload."""

    adapter: SourceAdapter
    normalize: Normalizer

    @property
    def source(self) -> SourceEnum:
        return self.adapter.source


class SourceRegistry:
    def __init__(self) -> None:
        self._sources: dict[SourceEnum, FeedSource] = {}

    def register(self, feed_source: FeedSource) -> None:
        key = feed_source.source
        if key in self._sources:
            raise ValueError(f"Duplicate source registration: {key}")
        self._sources[key] = feed_source

    def all(self) -> list[FeedSource]:
        """Registration order; merge precedence follows it."""
        return list(self._sources.values())
