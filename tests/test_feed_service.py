from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import pytest

from fixture_feed.feed.aggregator import Aggregator
from fixture_feed.feed.enums import OutcomeEnum, SourceEnum
from fixture_feed.feed.models import CalendarEvent
from fixture_feed.feed.service import CacheEntry, EventFeedService
from fixture_feed.ingestion.providers.base.errors import AggregationError, UpstreamError
from fixture_feed.ingestion.providers.base.registry import FeedSource

NOW = datetime(2025, 10, 15, 12, 0, tzinfo=UTC)

EVENT = CalendarEvent(
    id="MANCHESTER_UNITED-1",
    source=SourceEnum.MANCHESTER_UNITED,
    title="Manchester United vs Liverpool",
    start_time=NOW,
    competition="Premier League",
    result="2 - 1",
    outcome=OutcomeEnum.WIN,
    venue="Old Trafford",
    location="Old Trafford, Manchester, England",
    status="FT",
    subtitle="Liverpool",
)


@dataclass
class SlowAdapter:
    source: SourceEnum
    events: list[CalendarEvent] = field(default_factory=list)
    error: Exception | None = None
    delay_s: float = 0.0
    calls: int = 0

    async def fetch_raw(self) -> list[CalendarEvent]:
        self.calls += 1
        await asyncio.sleep(self.delay_s)
        if self.error is not None:
            raise self.error
        return self.events


def _passthrough(raw: Any, now: datetime) -> list[CalendarEvent]:
    return list(raw)


class FakeClock:
    def __init__(self) -> None:
        self.t = 0.0

    def __call__(self) -> float:
        return self.t


def _service(*adapters: SlowAdapter, clock: FakeClock | None = None, **kwargs: Any) -> EventFeedService:
    aggregator = Aggregator([FeedSource(adapter=a, normalize=_passthrough) for a in adapters])
    return EventFeedService(aggregator=aggregator, _monotonic=clock or FakeClock(), **kwargs)


def test_cache_entry_freshness() -> None:
    entry = CacheEntry(result=None, created_at=100.0, ttl_s=60.0)  # type: ignore[arg-type]
    assert entry.is_fresh(159.9)
    assert not entry.is_fresh(160.0)


@pytest.mark.asyncio
async def test_results_are_cached_until_ttl_expires() -> None:
    clock = FakeClock()
    adapter = SlowAdapter(SourceEnum.MANCHESTER_UNITED, [EVENT])
    service = _service(adapter, clock=clock, ttl_s=1800.0)

    first = await service.get_events()
    clock.t = 1799.0
    second = await service.get_events()
    assert first == second == (EVENT,)
    assert adapter.calls == 1

    clock.t = 1800.0
    await service.get_events()
    assert adapter.calls == 2


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_aggregation() -> None:
    adapter = SlowAdapter(SourceEnum.MANCHESTER_UNITED, [EVENT], delay_s=0.05)
    service = _service(adapter)

    results = await asyncio.gather(*(service.get_result() for _ in range(5)))

    assert adapter.calls == 1
    assert all(r is results[0] for r in results)


@pytest.mark.asyncio
async def test_invalidate_forces_refresh() -> None:
    adapter = SlowAdapter(SourceEnum.MANCHESTER_UNITED, [EVENT])
    service = _service(adapter)

    await service.get_events()
    service.invalidate()
    await service.get_events()

    assert adapter.calls == 2


@pytest.mark.asyncio
async def test_public_view_strips_internal_fields() -> None:
    service = _service(SlowAdapter(SourceEnum.MANCHESTER_UNITED, [EVENT]))

    public = await service.get_public_events()

    assert public == [
        {
            "id": "MANCHESTER_UNITED-1",
            "source": "MANCHESTER_UNITED",
            "title": "Manchester United vs Liverpool",
            "competition": "Premier League",
            "startTimeUTC": "2025-10-15T12:00:00Z",
            "result": "2 - 1",
            "outcome": "WIN",
        }
    ]
    full = EVENT.to_full_dict()
    assert full["venue"] == "Old Trafford"
    assert full["subtitle"] == "Liverpool"


@pytest.mark.asyncio
async def test_degraded_cycle_served_by_default() -> None:
    ok = SlowAdapter(SourceEnum.MANCHESTER_UNITED, [EVENT])
    broken = SlowAdapter(SourceEnum.UFC, error=UpstreamError(500, "https://espn.test/ufc"))
    service = _service(ok, broken)

    result = await service.get_result()

    assert result.events == (EVENT,)
    assert SourceEnum.UFC in result.failures


@pytest.mark.asyncio
async def test_require_all_sources_turns_partial_failure_into_error() -> None:
    ok = SlowAdapter(SourceEnum.MANCHESTER_UNITED, [EVENT])
    broken = SlowAdapter(SourceEnum.UFC, error=UpstreamError(500, "https://espn.test/ufc"))
    service = _service(ok, broken, require_all_sources=True)

    with pytest.raises(AggregationError) as excinfo:
        await service.get_result()

    assert "UFC" in excinfo.value.failures


@pytest.mark.asyncio
async def test_total_failure_raises_and_is_not_cached() -> None:
    broken = SlowAdapter(SourceEnum.UFC, error=UpstreamError(502, "https://espn.test/ufc"))
    service = _service(broken)

    with pytest.raises(AggregationError):
        await service.get_result()
    with pytest.raises(AggregationError):
        await service.get_result()

    assert broken.calls == 2


@pytest.mark.asyncio
async def test_invalidate_during_refresh_discards_stale_result() -> None:
    adapter = SlowAdapter(SourceEnum.MANCHESTER_UNITED, [EVENT], delay_s=0.05)
    service = _service(adapter)

    pending = asyncio.create_task(service.get_result())
    await asyncio.sleep(0)
    service.invalidate()

    stale = await pending
    assert stale.events == (EVENT,)

    await service.get_events()
    assert adapter.calls == 2
