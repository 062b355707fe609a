from __future__ import annotations

from enum import StrEnum


class SourceEnum(StrEnum):
    MANCHESTER_UNITED = "MANCHESTER_UNITED"
    LEEDS_UNITED = "LEEDS_UNITED"
    UFC = "UFC"
    LEGACY_CS2 = "LEGACY_CS2"

    @property
    def priority(self) -> int:
        return SOURCE_PRIORITY[self]


# Tie-break order for events sharing a start time.
SOURCE_PRIORITY: dict[SourceEnum, int] = {
    SourceEnum.MANCHESTER_UNITED: 0,
    SourceEnum.LEEDS_UNITED: 1,
    SourceEnum.LEGACY_CS2: 2,
    SourceEnum.UFC: 3,
}

SOURCE_ORDER: tuple[SourceEnum, ...] = tuple(sorted(SOURCE_PRIORITY, key=SOURCE_PRIORITY.get))


class OutcomeEnum(StrEnum):
    WIN = "WIN"
    LOSS = "LOSS"
    DRAW = "DRAW"


class PayloadKind(StrEnum):
    JSON = "json"
    MARKUP = "markup"
