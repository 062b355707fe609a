from __future__ import annotations

from datetime import UTC, datetime

import pytest

from fixture_feed.feed.enums import SOURCE_ORDER, OutcomeEnum, SourceEnum
from fixture_feed.feed.models import CalendarEvent


def test_source_order_follows_priority() -> None:
    assert SOURCE_ORDER == (
        SourceEnum.MANCHESTER_UNITED,
        SourceEnum.LEEDS_UNITED,
        SourceEnum.LEGACY_CS2,
        SourceEnum.UFC,
    )


def test_calendar_event_requires_title_and_aware_start() -> None:
    with pytest.raises(ValueError):
        CalendarEvent(id="UFC-1", source=SourceEnum.UFC, title="", start_time=datetime.now(UTC))
    with pytest.raises(ValueError):
        CalendarEvent(id="UFC-1", source=SourceEnum.UFC, title="UFC", start_time=datetime(2025, 1, 1))


def test_full_dict_omits_unset_fields() -> None:
    event = CalendarEvent(
        id="LEGACY_CS2-1",
        source=SourceEnum.LEGACY_CS2,
        title="Legacy vs FURIA",
        start_time=datetime(2025, 10, 19, 15, 30, tzinfo=UTC),
        outcome=OutcomeEnum.DRAW,
        status="S-Tier · Online",
        url="https://liquipedia.net/counterstrike/x",
    )

    assert event.to_full_dict() == {
        "id": "LEGACY_CS2-1",
        "source": "LEGACY_CS2",
        "title": "Legacy vs FURIA",
        "startTimeUTC": "2025-10-19T15:30:00Z",
        "outcome": "DRAW",
        "status": "S-Tier · Online",
        "url": "https://liquipedia.net/counterstrike/x",
    }
    assert "status" not in event.to_public_dict()
    assert event.to_public_dict()["url"] == "https://liquipedia.net/counterstrike/x"
