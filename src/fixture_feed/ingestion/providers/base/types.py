from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fixture_feed.feed.enums import SourceEnum

Json = dict[str, Any]


@dataclass(frozen=True)
class ClubConfig:
    """
    One tracked football club.

    `schedule_endpoints` are tried in order (primary league first);
    every `scoreboard_endpoints` entry is queried.
    """

    source: SourceEnum
    team_id: str
    display_name: str
    schedule_endpoints: tuple[str, ...]
    scoreboard_endpoints: tuple[str, ...] = ()


# Raw payloads: one rigid shape per provider, consumed by exactly one normalizer.


@dataclass(frozen=True)
class ClubFixtures:
    source: SourceEnum
    schedule: list[Json] = field(default_factory=list)
    scoreboard: list[Json] = field(default_factory=list)


@dataclass(frozen=True)
class CombatScoreboard:
    events: list[Json] = field(default_factory=list)


@dataclass(frozen=True)
class RosterPage:
    html: str | None = None


RawPayload = ClubFixtures | CombatScoreboard | RosterPage
