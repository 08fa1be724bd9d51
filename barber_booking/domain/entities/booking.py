from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELED = "CANCELED"
    COMPLETED = "COMPLETED"


# Statuses that occupy time on a barber's schedule
ACTIVE_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})


@dataclass(frozen=True)
class Booking:
    id: str
    barbershop_id: str
    barber_id: str
    service_id: str
    customer_id: str
    start: datetime
    duration_minutes: int  # snapshot of the service duration at booking time
    status: BookingStatus = BookingStatus.CONFIRMED
    created_at: datetime | None = None

    @property
    def end(self) -> datetime:
        return self.start + timedelta(minutes=self.duration_minutes)

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES
