from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from barber_booking.application.utils.date_parser import parse_hhmm
from barber_booking.domain.entities.schedule import (
    WEEKDAYS,
    DaySchedule,
    EnumeratedSlots,
    Interval,
    NoSlots,
    Unrecognized,
)


def weekday_key(target_date: date) -> str:
    return WEEKDAYS[target_date.weekday()]


def normalize_day_config(raw: Any) -> DaySchedule:
    """
    Turn one stored weekday value into a tagged DaySchedule.

    - None (or a missing weekday) means the barber does not work that day.
    - A list of "HH:MM" strings is the legacy enumerated shape.
    - A mapping with both "start" and "end" is the interval shape; only "available": true
      counts as working, a missing or non-boolean flag does not.
    Anything else comes back as Unrecognized so the caller can report it.
    """
    if raw is None:
        return NoSlots()

    if isinstance(raw, (list, tuple)):
        return EnumeratedSlots(literals=tuple(raw))

    if isinstance(raw, Mapping) and "start" in raw and "end" in raw:
        available = raw.get("available") is True
        start = parse_hhmm(raw["start"])
        end = parse_hhmm(raw["end"])
        if available and (start is None or end is None):
            return Unrecognized(
                reason=f"Working window has invalid bounds: start={raw['start']!r} end={raw['end']!r}"
            )
        return Interval(available=available, start=start, end=end)

    return Unrecognized(reason=f"Unsupported day configuration of type {type(raw).__name__}")


def resolve_day_schedule(weekly: Mapping[str, Any], target_date: date) -> DaySchedule:
    return normalize_day_config(weekly.get(weekday_key(target_date)))


def validate_weekly_availability(weekly: Any) -> dict[str, str]:
    """Return {field: message} for every problem found; empty when valid."""
    if not isinstance(weekly, Mapping):
        return {"availability": "Availability must be an object keyed by weekday."}

    problems: dict[str, str] = {}
    for key, value in weekly.items():
        if key not in WEEKDAYS:
            problems[str(key)] = f"Unknown weekday {key!r}."
            continue
        schedule = normalize_day_config(value)
        if isinstance(schedule, Unrecognized):
            problems[key] = schedule.reason
        elif isinstance(schedule, EnumeratedSlots):
            bad = [literal for literal in schedule.literals if parse_hhmm(literal) is None]
            if bad:
                problems[key] = f"Invalid time literals: {bad!r}"
    return problems
