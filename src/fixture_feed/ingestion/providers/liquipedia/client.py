from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fixture_feed.ingestion.providers.base.client import BaseHttpClient


def parse_page_params(page: str) -> dict[str, str]:
    # origin=* enables the anonymous cross-origin JSON variant of the MediaWiki API.
    return {
        "action": "parse",
        "page": page,
        "prop": "text",
        "format": "json",
        "origin": "*",
    }


def extract_rendered_html(payload: dict[str, Any]) -> str | None:
    """`parse.text["*"]` of a MediaWiki parse response, when present."""

    parse = payload.get("parse")
    if not isinstance(parse, dict):
        return None
    text = parse.get("text")
    if not isinstance(text, dict):
        return None
    html = text.get("*")
    if not isinstance(html, str) or not html.strip():
        return None
    return html


@dataclass
class LiquipediaClient:
    http: BaseHttpClient
    api_url: str

    async def get_page_html(self, page: str) -> str | None:
        payload = await self.http.get_json(self.api_url, params=parse_page_params(page))
        return extract_rendered_html(payload)
