from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any

from fixture_feed.feed.aggregator import AggregationResult, Aggregator
from fixture_feed.feed.models import CalendarEvent
from fixture_feed.ingestion.providers.base.errors import AggregationError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    result: AggregationResult
    created_at: float
    ttl_s: float

    def is_fresh(self, now: float) -> bool:
        return now - self.created_at < self.ttl_s


@dataclass
class EventFeedService:
    """
    Process-wide cached view of the aggregated feed.

    - A cache miss triggers exactly one aggregation; callers arriving while it
      runs wait for and share its result.
    - `require_all_sources=False` accepts degraded cycles (some sources failed);
      `True` turns any source failure into AggregationError.
    - A cycle where every source failed always raises and is never cached.
    """

    aggregator: Aggregator
    ttl_s: float = 60.0 * 60.0
    require_all_sources: bool = False

    _monotonic: Any = field(default=time.monotonic, repr=False)
    _entry: CacheEntry | None = field(default=None, init=False, repr=False)
    _inflight: asyncio.Task[AggregationResult] | None = field(default=None, init=False, repr=False)
    _generation: int = field(default=0, init=False, repr=False)

    def invalidate(self) -> None:
        """Drop the cached result; a refresh already running is not stored."""
        self._generation += 1
        self._entry = None
        self._inflight = None

    def _fresh_entry(self) -> CacheEntry | None:
        entry = self._entry
        if entry is not None and entry.is_fresh(float(self._monotonic())):
            return entry
        return None

    def _check_policy(self, result: AggregationResult) -> None:
        if not result.failures:
            return
        failures = {str(k): v for k, v in result.failures.items()}
        if len(result.failures) >= len(self.aggregator.sources):
            raise AggregationError("Every source failed to load", failures)
        if self.require_all_sources:
            raise AggregationError("Some sources failed to load", failures)
        LOGGER.warning("serving degraded feed; failed sources: %s", ", ".join(failures))

    async def _refresh(self, generation: int) -> AggregationResult:
        result = await self.aggregator.aggregate()
        self._check_policy(result)
        if generation != self._generation:
            return result
        self._entry = CacheEntry(
            result=result,
            created_at=float(self._monotonic()),
            ttl_s=self.ttl_s,
        )
        return result

    def _clear_inflight(self, task: asyncio.Task[AggregationResult]) -> None:
        if self._inflight is task:
            self._inflight = None

    async def get_result(self) -> AggregationResult:
        entry = self._fresh_entry()
        if entry is not None:
            return entry.result

        task = self._inflight
        if task is None:
            task = asyncio.ensure_future(self._refresh(self._generation))
            task.add_done_callback(self._clear_inflight)
            self._inflight = task

        # shield: a cancelled caller must not cancel the shared refresh
        return await asyncio.shield(task)

    async def get_events(self) -> tuple[CalendarEvent, ...]:
        return (await self.get_result()).events

    async def get_public_events(self) -> list[dict[str, Any]]:
        return (await self.get_result()).public_events()
