from __future__ import annotations

import re

_whitespace_re = re.compile(r"\s+")
_integer_re = re.compile(r"-?\d+")
_digit_re = re.compile(r"\d")


def clean_text(value: str | None) -> str | None:
    """Collapse whitespace runs; empty results become None."""

    if not value:
        return None
    v = _whitespace_re.sub(" ", value).strip()
    return v or None


def extract_int(value: str | None) -> int | None:
    """First signed integer found in a score-like string ("2", "2 (4)", "-1")."""

    if not isinstance(value, str) or not value:
        return None
    match = _integer_re.search(value)
    if match is None:
        return None
    return int(match.group(0))


def has_digit(value: str | None) -> bool:
    return bool(value) and _digit_re.search(value) is not None
