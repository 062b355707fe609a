from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from .errors import ProviderError

T = TypeVar("T")

LOGGER = logging.getLogger(__name__)

Attempt = Callable[[], Awaitable[T]]

_MISSING = object()


async def first_accepted(attempts: Sequence[Attempt[T]], accept: Callable[[T], bool]) -> T:
    """
    Run `attempts` in order and return the first result `accept` approves.

    - A failing attempt is logged and skipped.
    - If nothing is accepted, the most recent successful result is returned.
    - Only when every attempt failed does the last error propagate.
    """
    if not attempts:
        raise ValueError("first_accepted requires at least one attempt")

    last_result: object = _MISSING
    last_error: ProviderError | None = None

    for index, attempt in enumerate(attempts, start=1):
        try:
            result = await attempt()
        except ProviderError as exc:
            LOGGER.warning("attempt %d/%d failed: %s", index, len(attempts), exc)
            last_error = exc
            continue

        if accept(result):
            return result
        last_result = result

    if last_result is not _MISSING:
        return last_result  # type: ignore[return-value]

    assert last_error is not None
    raise last_error
