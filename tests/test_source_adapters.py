from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from fixture_feed.feed.enums import SourceEnum
from fixture_feed.ingestion.providers.base.client import BaseHttpClient
from fixture_feed.ingestion.providers.base.errors import UpstreamError
from fixture_feed.ingestion.providers.espn.adapters.club import (
    ClubAdapter,
    ClubScheduleAdapter,
    ClubScoreboardAdapter,
)
from fixture_feed.ingestion.providers.espn.adapters.ufc import CombatSportsAdapter
from fixture_feed.ingestion.providers.espn.client import EspnClient, ufc_scoreboard_url
from fixture_feed.ingestion.providers.espn.clubs import leeds_united
from fixture_feed.ingestion.providers.liquipedia.adapter import RosterPageAdapter
from fixture_feed.ingestion.providers.liquipedia.client import LiquipediaClient

BASE = "https://espn.test/sports"
LEEDS = leeds_united(BASE)


def _event(event_id: str, *team_ids: str) -> dict[str, Any]:
    return {
        "id": event_id,
        "date": "2025-10-19T15:30Z",
        "competitions": [{"competitors": [{"team": {"id": t}} for t in team_ids]}],
    }


def _http(routes: dict[str, Callable[[httpx.Request], httpx.Response]]) -> tuple[BaseHttpClient, list[str]]:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        route = routes.get(request.url.path)
        if route is None:
            return httpx.Response(404)
        return route(request)

    return BaseHttpClient(user_agent="test", transport=httpx.MockTransport(handler)), calls


def _json(payload: dict[str, Any]) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(200, json=payload)


PRIMARY_SCHEDULE = "/sports/soccer/eng.1/teams/357/schedule"
SECONDARY_SCHEDULE = "/sports/soccer/eng.2/teams/357/schedule"
PRIMARY_SCOREBOARD = "/sports/soccer/eng.1/scoreboard"
SECONDARY_SCOREBOARD = "/sports/soccer/eng.2/scoreboard"


@pytest.mark.asyncio
async def test_schedule_falls_back_to_secondary_league_when_primary_empty() -> None:
    http, calls = _http(
        {
            PRIMARY_SCHEDULE: _json({"events": []}),
            SECONDARY_SCHEDULE: _json({"events": [_event("1", "357", "331")]}),
        }
    )
    async with http:
        events = await ClubScheduleAdapter(client=EspnClient(http=http), club=LEEDS).fetch_events()

    assert [e["id"] for e in events] == ["1"]
    assert calls == [PRIMARY_SCHEDULE, SECONDARY_SCHEDULE]


@pytest.mark.asyncio
async def test_schedule_accepts_primary_without_querying_secondary() -> None:
    http, calls = _http({PRIMARY_SCHEDULE: _json({"events": [_event("1", "357")]})})
    async with http:
        events = await ClubScheduleAdapter(client=EspnClient(http=http), club=LEEDS).fetch_events()

    assert len(events) == 1
    assert calls == [PRIMARY_SCHEDULE]


@pytest.mark.asyncio
async def test_schedule_failure_on_every_endpoint_propagates() -> None:
    http, _ = _http({})
    async with http:
        with pytest.raises(UpstreamError):
            await ClubScheduleAdapter(client=EspnClient(http=http), club=LEEDS).fetch_events()


@pytest.mark.asyncio
async def test_scoreboard_filters_to_club_and_sends_window_params() -> None:
    seen_params: list[httpx.QueryParams] = []

    def primary(request: httpx.Request) -> httpx.Response:
        seen_params.append(request.url.params)
        return httpx.Response(
            200, json={"events": [_event("1", "357", "331"), _event("2", "360", "364")]}
        )

    http, _ = _http(
        {
            PRIMARY_SCOREBOARD: primary,
            SECONDARY_SCOREBOARD: _json({"events": [_event("3", "357", "349")]}),
        }
    )
    async with http:
        events = await ClubScoreboardAdapter(client=EspnClient(http=http), club=LEEDS).fetch_events()

    assert [e["id"] for e in events] == ["1", "3"]
    assert seen_params[0]["limit"] == "200"
    assert len(seen_params[0]["dates"]) == len("yyyyMMdd-yyyyMMdd")


@pytest.mark.asyncio
async def test_scoreboard_tolerates_partial_endpoint_failure() -> None:
    http, _ = _http({SECONDARY_SCOREBOARD: _json({"events": [_event("3", "357")]})})
    async with http:
        events = await ClubScoreboardAdapter(client=EspnClient(http=http), club=LEEDS).fetch_events()

    assert [e["id"] for e in events] == ["3"]


@pytest.mark.asyncio
async def test_scoreboard_raises_when_all_endpoints_fail() -> None:
    http, _ = _http({})
    async with http:
        with pytest.raises(UpstreamError):
            await ClubScoreboardAdapter(client=EspnClient(http=http), club=LEEDS).fetch_events()


@pytest.mark.asyncio
async def test_scoreboard_empty_without_errors_is_not_a_failure() -> None:
    http, _ = _http(
        {
            PRIMARY_SCOREBOARD: _json({"events": [_event("2", "360")]}),
            SECONDARY_SCOREBOARD: _json({}),
        }
    )
    async with http:
        events = await ClubScoreboardAdapter(client=EspnClient(http=http), club=LEEDS).fetch_events()

    assert events == []


@pytest.mark.asyncio
async def test_club_adapter_treats_one_failed_half_as_empty() -> None:
    http, _ = _http({PRIMARY_SCHEDULE: _json({"events": [_event("1", "357")]})})
    async with http:
        raw = await ClubAdapter.for_club(EspnClient(http=http), LEEDS).fetch_raw()

    assert raw.source is SourceEnum.LEEDS_UNITED
    assert [e["id"] for e in raw.schedule] == ["1"]
    assert raw.scoreboard == []


@pytest.mark.asyncio
async def test_club_adapter_raises_when_both_halves_fail() -> None:
    http, _ = _http({})
    async with http:
        with pytest.raises(UpstreamError):
            await ClubAdapter.for_club(EspnClient(http=http), LEEDS).fetch_raw()


@pytest.mark.asyncio
async def test_combat_sports_adapter_queries_scoreboard_once() -> None:
    http, calls = _http({"/sports/mma/ufc/scoreboard": _json({"events": [{"id": "1"}, "junk"]})})
    async with http:
        adapter = CombatSportsAdapter(client=EspnClient(http=http), url=ufc_scoreboard_url(BASE))
        raw = await adapter.fetch_raw()

    assert raw.events == [{"id": "1"}]
    assert calls == ["/sports/mma/ufc/scoreboard"]


@pytest.mark.asyncio
async def test_roster_page_adapter_extracts_markup_fragment() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["action"] == "parse"
        assert request.url.params["page"] == "Legacy"
        assert request.url.params["origin"] == "*"
        return httpx.Response(200, json={"parse": {"text": {"*": "<table></table>"}}})

    async with BaseHttpClient(user_agent="test", transport=httpx.MockTransport(handler)) as http:
        client = LiquipediaClient(http=http, api_url="https://wiki.test/api.php")
        raw = await RosterPageAdapter(client=client, page="Legacy").fetch_raw()

    assert raw.html == "<table></table>"


@pytest.mark.asyncio
async def test_roster_page_adapter_missing_fragment_is_empty() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"error": {"code": "missingtitle"}}))
    async with BaseHttpClient(user_agent="test", transport=transport) as http:
        client = LiquipediaClient(http=http, api_url="https://wiki.test/api.php")
        raw = await RosterPageAdapter(client=client, page="Legacy").fetch_raw()

    assert raw.html is None
