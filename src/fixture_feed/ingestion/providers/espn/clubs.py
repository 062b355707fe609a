from __future__ import annotations

from fixture_feed.feed.enums import SourceEnum
from fixture_feed.ingestion.providers.base.types import ClubConfig
from fixture_feed.ingestion.providers.espn.client import soccer_scoreboard_url, team_schedule_url

PREMIER_LEAGUE = "eng.1"
CHAMPIONSHIP = "eng.2"


def manchester_united(base_url: str) -> ClubConfig:
    return ClubConfig(
        source=SourceEnum.MANCHESTER_UNITED,
        team_id="360",
        display_name="Manchester United",
        schedule_endpoints=(team_schedule_url(base_url, PREMIER_LEAGUE, "360"),),
        scoreboard_endpoints=(soccer_scoreboard_url(base_url, PREMIER_LEAGUE),),
    )


def leeds_united(base_url: str) -> ClubConfig:
    # Leeds may be in either division; both are queried, top flight first.
    return ClubConfig(
        source=SourceEnum.LEEDS_UNITED,
        team_id="357",
        display_name="Leeds United",
        schedule_endpoints=(
            team_schedule_url(base_url, PREMIER_LEAGUE, "357"),
            team_schedule_url(base_url, CHAMPIONSHIP, "357"),
        ),
        scoreboard_endpoints=(
            soccer_scoreboard_url(base_url, PREMIER_LEAGUE),
            soccer_scoreboard_url(base_url, CHAMPIONSHIP),
        ),
    )


def default_clubs(base_url: str) -> tuple[ClubConfig, ...]:
    return manchester_united(base_url), leeds_united(base_url)
