from __future__ import annotations

from typing import Protocol

from fixture_feed.feed.enums import SourceEnum

from .types import RawPayload


class SourceAdapter(Protocol):
    """
    Aggregation depends on this, not on any HTTP client.

    One adapter per source; it knows the provider's query rules and endpoint
    fallback policy, and nothing about the canonical event shape.
    """

    source: SourceEnum

    async def fetch_raw(self) -> RawPayload:
        """
        Fetch the provider payload for this source.
        Raises ProviderError subclasses when the source is unavailable.
        """
        ...
