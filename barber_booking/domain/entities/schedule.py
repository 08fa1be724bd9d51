from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Literal, Union

WEEKDAYS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


@dataclass(frozen=True)
class NoSlots:
    kind: Literal["no_slots"] = "no_slots"


@dataclass(frozen=True)
class EnumeratedSlots:
    """Legacy day config: explicit list of start-time literals."""

    literals: tuple[object, ...]
    kind: Literal["enumerated"] = "enumerated"


@dataclass(frozen=True)
class Interval:
    """Day config expressed as a working window."""

    available: bool
    start: time | None
    end: time | None
    kind: Literal["interval"] = "interval"


@dataclass(frozen=True)
class Unrecognized:
    reason: str
    kind: Literal["unrecognized"] = "unrecognized"


DaySchedule = Union[NoSlots, EnumeratedSlots, Interval, Unrecognized]


@dataclass(frozen=True)
class CandidateSlot:
    start: datetime
    end: datetime
