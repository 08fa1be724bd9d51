from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from barber_booking.application.utils.date_parser import format_hhmm, parse_hhmm
from barber_booking.domain.entities.schedule import WEEKDAYS, Interval

# Any fixed date works: only wall-clock arithmetic is needed here
_BASE_DATE = date(2000, 1, 1)


@dataclass(frozen=True)
class DayWindow:
    enabled: bool
    start: str = "09:00"
    end: str = "18:00"
    lunch_start: str = "12:00"
    lunch_end: str = "13:00"


def build_day_slots(window: DayWindow, interval_minutes: int) -> list[str]:
    """
    Expand a working window into enumerated "HH:MM" start times.

    Steps from start every interval_minutes while the cursor is before end;
    a cursor that lands inside [lunch_start, lunch_end) jumps to lunch_end.
    Raises ValueError for malformed times or a non-positive interval.
    """
    if interval_minutes < 1:
        raise ValueError(f"interval_minutes must be >= 1, got {interval_minutes}")
    if not window.enabled:
        return []

    start, end, lunch_start, lunch_end = (
        _parse_required(value, name)
        for value, name in (
            (window.start, "start"),
            (window.end, "end"),
            (window.lunch_start, "lunch_start"),
            (window.lunch_end, "lunch_end"),
        )
    )

    step = timedelta(minutes=interval_minutes)
    cursor = start
    slots: list[str] = []
    while cursor < end:
        if lunch_start <= cursor < lunch_end:
            cursor = lunch_end
            continue
        slots.append(format_hhmm(cursor))
        cursor += step
    return slots


def build_weekly_slots(windows: Mapping[str, DayWindow], interval_minutes: int) -> dict[str, list[str]]:
    unknown = [day for day in windows if day not in WEEKDAYS]
    if unknown:
        raise ValueError(f"Unknown weekdays: {unknown}")
    return {day: build_day_slots(window, interval_minutes) for day, window in windows.items()}


def window_from_interval(schedule: Interval) -> DayWindow:
    """Editor window for a day stored in the interval shape."""
    return DayWindow(
        enabled=schedule.available,
        start=format_hhmm(schedule.start) if schedule.start else "09:00",
        end=format_hhmm(schedule.end) if schedule.end else "18:00",
    )


def _parse_required(value: str, name: str) -> datetime:
    parsed: time | None = parse_hhmm(value)
    if parsed is None:
        raise ValueError(f"Invalid {name} time: {value!r}")
    return datetime.combine(_BASE_DATE, parsed)
