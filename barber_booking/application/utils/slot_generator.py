from __future__ import annotations

from collections.abc import Iterator
from datetime import date, timedelta
from zoneinfo import ZoneInfo

from barber_booking.application.utils.date_parser import at_time, parse_hhmm
from barber_booking.domain.entities.schedule import (
    CandidateSlot,
    DaySchedule,
    EnumeratedSlots,
    Interval,
    NoSlots,
)


def generate_candidate_slots(
    schedule: DaySchedule,
    duration_minutes: int,
    target_date: date,
    timezone: ZoneInfo,
) -> Iterator[CandidateSlot]:
    """
    Yield the candidate slots of one day in non-decreasing start order.

    Every slot lasts duration_minutes, whatever spacing the stored
    configuration implies. The result is a one-shot generator, recomputed on
    each call.
    """
    if duration_minutes < 1:
        raise ValueError(f"duration_minutes must be >= 1, got {duration_minutes}")

    length = timedelta(minutes=duration_minutes)

    if isinstance(schedule, NoSlots):
        return
    if isinstance(schedule, EnumeratedSlots):
        yield from _enumerated(schedule, length, target_date, timezone)
        return
    if isinstance(schedule, Interval):
        yield from _interval(schedule, length, target_date, timezone)
        return
    raise ValueError(f"Cannot generate slots for schedule kind {schedule.kind!r}")


def _enumerated(
    schedule: EnumeratedSlots,
    length: timedelta,
    target_date: date,
    timezone: ZoneInfo,
) -> Iterator[CandidateSlot]:
    # Unparseable literals come from hand-entered legacy data and are dropped
    parsed = (parse_hhmm(literal) for literal in schedule.literals)
    starts = sorted(at_time(target_date, t, timezone) for t in parsed if t is not None)
    for start in starts:
        yield CandidateSlot(start=start, end=start + length)


def _interval(
    schedule: Interval,
    length: timedelta,
    target_date: date,
    timezone: ZoneInfo,
) -> Iterator[CandidateSlot]:
    if not schedule.available or schedule.start is None or schedule.end is None:
        return

    cursor = at_time(target_date, schedule.start, timezone)
    work_end = at_time(target_date, schedule.end, timezone)

    # A slot is offered only if it fits entirely inside the window
    while cursor + length <= work_end:
        yield CandidateSlot(start=cursor, end=cursor + length)
        cursor += length
