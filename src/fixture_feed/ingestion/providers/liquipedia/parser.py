from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from fixture_feed.core.text import clean_text, has_digit
from fixture_feed.feed.enums import OutcomeEnum, SourceEnum
from fixture_feed.feed.models import CalendarEvent
from fixture_feed.ingestion.dates import LEGACY_WINDOW, EventWindow, parse_epoch_seconds
from fixture_feed.ingestion.providers.base.types import RosterPage

LOGGER = logging.getLogger(__name__)

LIQUIPEDIA_BASE_URL = "https://liquipedia.net"
MIN_MATCH_CELLS = 8

_ROW_CLASS_PREFIXES = ("recent-matches", "upcoming-matches", "upcoming-match")

# Column layout of the team page's match tables.
_TIER_CELL = 1
_TYPE_CELL = 2
_TOURNAMENT_CELL = 5
_SCORE_CELL = 6
_OPPONENT_CELL = 7


def is_match_row(classes: list[str]) -> bool:
    return any(c.startswith(_ROW_CLASS_PREFIXES) or c == "match-row" for c in classes)


def row_outcome(classes: list[str]) -> OutcomeEnum | None:
    if any("bg-win" in c for c in classes):
        return OutcomeEnum.WIN
    if any("bg-lose" in c for c in classes):
        return OutcomeEnum.LOSS
    if any("bg-draw" in c or "bg-tie" in c for c in classes):
        return OutcomeEnum.DRAW
    return None


def _classes(tag: Tag) -> list[str]:
    value = tag.get("class")
    if isinstance(value, str):
        return value.split()
    return list(value or [])


def _cell_text(cell: Tag | None) -> str | None:
    if cell is None:
        return None
    return clean_text(cell.get_text())


@dataclass(frozen=True)
class MatchRow:
    """Structured view of one match table row."""

    timestamp_attr: str | None
    start_time: datetime | None
    classes: list[str]
    tier: str | None
    match_type: str | None
    tournament: str | None
    tournament_href: str | None
    score: str | None
    opponent: str | None

    @property
    def dedup_key(self) -> str:
        if self.timestamp_attr:
            return self.timestamp_attr
        return f"{self.tournament or 'match'}-{self.opponent or 'opponent'}"


def read_match_row(row: Tag) -> MatchRow | None:
    """None when the row lacks the minimum cell count."""

    cells = row.find_all("td")
    if len(cells) < MIN_MATCH_CELLS:
        return None

    stamp = row.select_one("[data-timestamp]")
    timestamp_attr = None
    if stamp is not None:
        raw = stamp.get("data-timestamp")
        timestamp_attr = raw.strip() if isinstance(raw, str) and raw.strip() else None

    tournament_cell = cells[_TOURNAMENT_CELL]
    link = tournament_cell.find("a")
    href = link.get("href") if link is not None else None

    return MatchRow(
        timestamp_attr=timestamp_attr,
        start_time=parse_epoch_seconds(timestamp_attr),
        classes=_classes(row),
        tier=_cell_text(cells[_TIER_CELL]),
        match_type=_cell_text(cells[_TYPE_CELL]),
        tournament=_cell_text(link) or _cell_text(tournament_cell),
        tournament_href=href if isinstance(href, str) and href else None,
        score=_cell_text(cells[_SCORE_CELL]),
        opponent=_cell_text(cells[_OPPONENT_CELL]),
    )


def _join(parts: list[str | None]) -> str | None:
    present = [p for p in parts if p]
    return " · ".join(present) if present else None


def normalize_legacy_matches(
    page: RosterPage,
    *,
    now: datetime,
    roster_name: str = "Legacy",
    base_url: str = LIQUIPEDIA_BASE_URL,
    window: EventWindow = LEGACY_WINDOW,
) -> list[CalendarEvent]:
    if not page.html:
        return []

    soup = BeautifulSoup(page.html, "html.parser")
    seen: set[str] = set()
    events: list[CalendarEvent] = []

    for row in soup.find_all("tr"):
        if not is_match_row(_classes(row)):
            continue

        match = read_match_row(row)
        if match is None:
            continue
        if match.start_time is None or not window.contains(match.start_time, now):
            continue

        event_id = f"{SourceEnum.LEGACY_CS2}-{match.dedup_key}"
        if event_id in seen:
            continue
        seen.add(event_id)

        if match.opponent:
            title = f"{roster_name} vs {match.opponent}"
        else:
            title = match.tournament or f"{roster_name} match"

        events.append(
            CalendarEvent(
                id=event_id,
                source=SourceEnum.LEGACY_CS2,
                title=title,
                competition=match.tournament,
                start_time=match.start_time,
                result=match.score if has_digit(match.score) else None,
                outcome=row_outcome(match.classes),
                status=_join([match.tier, match.match_type]),
                subtitle=_join([match.opponent, match.tournament]),
                url=urljoin(base_url, match.tournament_href) if match.tournament_href else None,
            )
        )

    LOGGER.debug("parsed %d %s matches", len(events), roster_name)
    return events
