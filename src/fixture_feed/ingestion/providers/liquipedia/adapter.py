from __future__ import annotations

from dataclasses import dataclass

from fixture_feed.feed.enums import SourceEnum
from fixture_feed.ingestion.providers.base.types import RosterPage
from fixture_feed.ingestion.providers.liquipedia.client import LiquipediaClient


@dataclass(frozen=True)
class RosterPageAdapter:
    """Rendered team page; a missing markup fragment yields an empty page, not an error."""

    client: LiquipediaClient
    page: str
    source: SourceEnum = SourceEnum.LEGACY_CS2

    async def fetch_raw(self) -> RosterPage:
        return RosterPage(html=await self.client.get_page_html(self.page))
