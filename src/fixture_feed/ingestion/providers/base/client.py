from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from fixture_feed.feed.enums import PayloadKind

from .errors import ParseError, TransportError, UpstreamError

Json = Any

_ACCEPT: dict[PayloadKind, str] = {
    PayloadKind.JSON: "application/json",
    PayloadKind.MARKUP: "text/html",
}


@dataclass
class BaseHttpClient:
    """
    Provider-agnostic async HTTP client wrapper.

    - Uses a single underlying httpx.AsyncClient for connection pooling.
    - Attaches the identifying User-Agent and an Accept header per payload kind.
    - Maps every failure onto TransportError / UpstreamError / ParseError.
    - No retries; endpoint fallback belongs to the adapters.
    """

    user_agent: str
    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0
    headers: Mapping[str, str] = field(default_factory=dict)

    transport: httpx.AsyncBaseTransport | None = None

    def __post_init__(self) -> None:
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_s, connect=self.connect_timeout_s),
            headers={"User-Agent": self.user_agent, **dict(self.headers)},
            follow_redirects=True,
            transport=self.transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> BaseHttpClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def fetch(
        self,
        url: str,
        kind: PayloadKind,
        *,
        params: Mapping[str, Any] | None = None,
    ) -> Json | str:
        """
        GET `url` and return parsed JSON (PayloadKind.JSON) or body text (PayloadKind.MARKUP).
        """
        try:
            resp = await self._client.get(
                url,
                params=params,
                headers={"Accept": _ACCEPT[kind]},
            )
        except httpx.RequestError as e:
            raise TransportError(f"{type(e).__name__} for GET {url}: {e}") from e

        if not resp.is_success:
            raise UpstreamError(resp.status_code, str(resp.request.url))

        if kind is PayloadKind.MARKUP:
            return resp.text

        try:
            return resp.json()
        except ValueError as e:
            raise ParseError(f"Response from {resp.request.url} was not valid JSON.") from e

    async def get_json(self, url: str, *, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        data = await self.fetch(url, PayloadKind.JSON, params=params)
        if not isinstance(data, dict):
            raise ParseError(f"Expected JSON object from {url}, got {type(data).__name__}")
        return data

    async def get_text(self, url: str, *, params: Mapping[str, Any] | None = None) -> str:
        return await self.fetch(url, PayloadKind.MARKUP, params=params)
