from __future__ import annotations

from collections.abc import Mapping


class ProviderError(RuntimeError):
    """Base exception for provider-related failures."""


class TransportError(ProviderError):
    """The request could not be sent or completed (timeouts, connection errors)."""


class UpstreamError(ProviderError):
    """Provider answered with a non-2xx status."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"HTTP {status_code} for GET {url}")
        self.status_code = status_code
        self.url = url


class ParseError(ProviderError):
    """Payload present but structurally unusable."""


class AggregationError(ProviderError):
    """An aggregation cycle could not produce a feed the caller accepts."""

    def __init__(self, message: str, failures: Mapping[str, str] | None = None) -> None:
        super().__init__(message)
        self.failures = dict(failures or {})

    def __str__(self) -> str:  # pragma: no cover
        if not self.failures:
            return self.args[0]
        return f"{self.args[0]} | failures={self.failures}"
