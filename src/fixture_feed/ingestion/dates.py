from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def shift_months(moment: datetime, months: int) -> datetime:
    """Move `moment` by whole calendar months, clamping to the target month's last day."""

    index = moment.month - 1 + months
    year = moment.year + index // 12
    month = index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def utc_now() -> datetime:
    return datetime.now(UTC)


def iso_z(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    dt = dt.astimezone(UTC).replace(microsecond=0)
    return dt.isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class EventWindow:
    """Inclusive [now - months_behind, now + months_ahead] relevance range."""

    months_behind: int
    months_ahead: int

    def bounds(self, now: datetime) -> tuple[datetime, datetime]:
        return shift_months(now, -self.months_behind), shift_months(now, self.months_ahead)

    def contains(self, moment: datetime, now: datetime) -> bool:
        earliest, latest = self.bounds(now)
        return earliest <= moment <= latest

    def dates_param(self, now: datetime) -> str:
        """Provider query form: yyyyMMdd-yyyyMMdd."""
        earliest, latest = self.bounds(now)
        return f"{earliest:%Y%m%d}-{latest:%Y%m%d}"


DEFAULT_WINDOW = EventWindow(months_behind=1, months_ahead=6)
LEGACY_WINDOW = EventWindow(months_behind=3, months_ahead=18)


def parse_provider_datetime(value: Any) -> datetime | None:
    """
    Best-effort parser for provider timestamps into tz-aware UTC datetimes.

    Supports:
      - "2025-10-12T17:00:00Z" / "+00:00" offsets
      - minute precision: "2025-10-12T17:00Z"
      - date only: "2025-10-12" (midnight UTC)

    Returns None instead of raising on bad input.
    """
    if not isinstance(value, str) or not value.strip():
        return None

    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(v)
    except ValueError:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_epoch_seconds(value: Any) -> datetime | None:
    """Leading integer digits of `value` as epoch seconds ("1760887800.0" reads as 1760887800)."""

    if value is None:
        return None
    m = _LEADING_INT.match(str(value))
    if m is None:
        return None
    try:
        return datetime.fromtimestamp(int(m.group(1)), tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None
