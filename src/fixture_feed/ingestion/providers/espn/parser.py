from __future__ import annotations

from datetime import datetime
from typing import Any

from fixture_feed.core.text import clean_text, extract_int
from fixture_feed.feed.enums import OutcomeEnum, SourceEnum
from fixture_feed.feed.models import CalendarEvent
from fixture_feed.ingestion.dates import DEFAULT_WINDOW, EventWindow, iso_z, parse_provider_datetime
from fixture_feed.ingestion.providers.base.types import ClubConfig, ClubFixtures, CombatScoreboard

ApiItem = dict[str, Any]

# Fights without an explicit match number rank behind numbered ones.
UNNUMBERED_MATCH_RANK = 100


def _dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _dicts(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


def _str(value: Any) -> str | None:
    if isinstance(value, str):
        return value or None
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return None


def _first_competition(event: ApiItem) -> dict[str, Any]:
    competitions = _dicts(event.get("competitions"))
    return competitions[0] if competitions else {}


def _team_id(competitor: dict[str, Any]) -> str | None:
    return _str(_dict(competitor.get("team")).get("id"))


def score_text(value: Any) -> str | None:
    """
    Scoreboard endpoints report scores as strings ("2"); team schedules as
    objects ({"value": 2.0, "displayValue": "2"}).
    """
    if isinstance(value, dict):
        display = _str(value.get("displayValue"))
        if display is not None:
            return display
        raw = value.get("value")
        if isinstance(raw, float) and raw.is_integer():
            return str(int(raw))
        return _str(raw)
    return _str(value)


def derive_outcome(ours: int, theirs: int) -> OutcomeEnum:
    if ours > theirs:
        return OutcomeEnum.WIN
    if ours < theirs:
        return OutcomeEnum.LOSS
    return OutcomeEnum.DRAW


def build_location(venue: dict[str, Any]) -> str | None:
    address = _dict(venue.get("address"))
    pieces = [
        _str(venue.get("fullName")),
        _str(address.get("city")),
        _str(address.get("country")),
    ]
    present = [p for p in pieces if p]
    return ", ".join(present) if present else None


def _is_concluded(status_type: dict[str, Any]) -> bool:
    return status_type.get("state") == "post" or status_type.get("completed") is True


def _competition_label(event: ApiItem) -> str | None:
    return (
        _str(_dict(event.get("league")).get("shortName"))
        or _str(_dict(event.get("seasonType")).get("name"))
        or _str(_dict(event.get("season")).get("displayName"))
    )


def normalize_club_event(
    event: ApiItem,
    club: ClubConfig,
    *,
    now: datetime,
    window: EventWindow = DEFAULT_WINDOW,
) -> CalendarEvent | None:
    """Map one ESPN soccer fixture to a CalendarEvent, or None when it is unusable."""

    competition = _first_competition(event)
    start_time = parse_provider_datetime(competition.get("date") or event.get("date"))
    if start_time is None or not window.contains(start_time, now):
        return None

    competitors = _dicts(competition.get("competitors"))
    focus = next((c for c in competitors if _team_id(c) == club.team_id), None)
    opponent = next(
        (c for c in competitors if _team_id(c) is not None and _team_id(c) != club.team_id),
        None,
    )

    opponent_name = clean_text(_str(_dict((opponent or {}).get("team")).get("displayName")))
    qualifier = "@" if focus is not None and focus.get("homeAway") == "away" else "vs"
    title = f"{club.display_name} {qualifier} {opponent_name or 'TBD'}"

    status_type = _dict(_dict(competition.get("status")).get("type"))
    status_detail = _str(status_type.get("detail"))
    status_description = _str(status_type.get("description"))

    result: str | None = None
    outcome: OutcomeEnum | None = None
    if _is_concluded(status_type):
        ours = score_text((focus or {}).get("score"))
        theirs = score_text((opponent or {}).get("score"))
        ours_n = extract_int(ours)
        theirs_n = extract_int(theirs)
        if ours_n is not None and theirs_n is not None:
            result = f"{ours} - {theirs}"
            outcome = derive_outcome(ours_n, theirs_n)
        else:
            result = status_detail or status_description

    venue = _dict(competition.get("venue"))
    provider_id = _str(event.get("id"))

    return CalendarEvent(
        id=f"{club.source}-{provider_id or iso_z(start_time)}",
        source=club.source,
        title=title,
        competition=_competition_label(event),
        start_time=start_time,
        result=result,
        outcome=outcome,
        venue=_str(venue.get("fullName")),
        location=build_location(venue),
        status=status_detail or status_description,
        subtitle=opponent_name or "TBD",
    )


def normalize_club_events(
    events: list[ApiItem],
    club: ClubConfig,
    *,
    now: datetime,
    window: EventWindow = DEFAULT_WINDOW,
) -> list[CalendarEvent]:
    normalized: list[CalendarEvent] = []
    for event in events:
        if not isinstance(event, dict):
            continue
        item = normalize_club_event(event, club, now=now, window=window)
        if item is not None:
            normalized.append(item)
    return normalized


def normalize_club_fixtures(
    payload: ClubFixtures,
    club: ClubConfig,
    *,
    now: datetime,
) -> list[CalendarEvent]:
    """Schedule entries first, then scoreboard entries (which replace same-id fixtures)."""

    merged: dict[str, CalendarEvent] = {}
    for events in (payload.schedule, payload.scoreboard):
        for item in normalize_club_events(events, club, now=now):
            merged[item.id] = item
    return list(merged.values())


def pick_main_competition(competitions: list[dict[str, Any]]) -> dict[str, Any] | None:
    """
    Main-card bouts are preferred; among candidates the lowest match number wins
    (missing numbers rank as UNNUMBERED_MATCH_RANK, first seen wins ties).
    """
    if not competitions:
        return None

    main = [c for c in competitions if _dict(c.get("cardSegment")).get("name") == "main"]
    pool = main or competitions

    def rank(competition: dict[str, Any]) -> int:
        number = competition.get("matchNumber")
        if isinstance(number, int | float) and not isinstance(number, bool):
            return int(number)
        return UNNUMBERED_MATCH_RANK

    return min(pool, key=rank)


def _group_by_event_id(events: list[ApiItem]) -> dict[str, tuple[ApiItem, list[dict[str, Any]]]]:
    """
    Collapse entries sharing a provider event id. The first entry supplies the
    event fields; bouts from every duplicate are pooled.
    """
    grouped: dict[str, tuple[ApiItem, list[dict[str, Any]]]] = {}
    for event in events:
        if not isinstance(event, dict):
            continue
        provider_id = _str(event.get("id"))
        if provider_id is None:
            continue
        if provider_id not in grouped:
            grouped[provider_id] = (event, [])
        grouped[provider_id][1].extend(_dicts(event.get("competitions")))
    return grouped


def normalize_ufc_events(
    payload: CombatScoreboard,
    *,
    now: datetime,
    window: EventWindow = DEFAULT_WINDOW,
) -> list[CalendarEvent]:
    normalized: list[CalendarEvent] = []

    for provider_id, (event, competitions) in _group_by_event_id(payload.events).items():
        competition = pick_main_competition(competitions) or {}
        start_time = parse_provider_datetime(event.get("date") or competition.get("date"))
        if start_time is None or not window.contains(start_time, now):
            continue

        names = [
            _str(_dict(c.get("athlete")).get("displayName"))
            for c in _dicts(competition.get("competitors"))
        ]
        fighters = " vs ".join(n for n in names if n)

        bout_type = _dict(competition.get("type"))
        bout_label = _str(bout_type.get("text"))

        normalized.append(
            CalendarEvent(
                id=f"{SourceEnum.UFC}-{provider_id}",
                source=SourceEnum.UFC,
                title=_str(event.get("name")) or bout_label or "UFC Event",
                competition=bout_label or _str(bout_type.get("abbreviation")),
                fighters=fighters or None,
                start_time=start_time,
            )
        )

    return normalized
