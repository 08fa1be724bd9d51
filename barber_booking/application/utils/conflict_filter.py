from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from barber_booking.application.utils.date_parser import format_hhmm
from barber_booking.domain.entities.booking import Booking
from barber_booking.domain.entities.schedule import CandidateSlot


def overlaps(start: datetime, end: datetime, booking: Booking) -> bool:
    """Half-open [start, end) against [booking.start, booking.end), plus an equal-start check."""
    if start == booking.start:
        return True
    return start < booking.end and end > booking.start


def conflicting_bookings(start: datetime, end: datetime, bookings: Iterable[Booking]) -> list[Booking]:
    return [b for b in bookings if b.is_active and overlaps(start, end, b)]


def filter_conflicts(candidates: Iterable[CandidateSlot], bookings: Sequence[Booking]) -> list[str]:
    """Drop candidates that collide with an active booking; keep order, return "HH:MM" labels."""
    active = [b for b in bookings if b.is_active]
    return [
        format_hhmm(slot.start)
        for slot in candidates
        if not any(overlaps(slot.start, slot.end, booking) for booking in active)
    ]
