from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from barber_booking.application.dto.outcomes import (
    BookingOutcome,
    slot_already_booked,
    slot_no_longer_available,
)
from barber_booking.application.exceptions import ConstraintViolation
from barber_booking.application.ports.page_cache import PageCachePort
from barber_booking.application.ports.scheduling_store import SchedulingStorePort
from barber_booking.application.use_cases.get_available_times import GetAvailableTimesUseCase
from barber_booking.application.utils.date_parser import format_hhmm
from barber_booking.domain.entities.barbershop import Barber, Customer, Service
from barber_booking.domain.entities.booking import BookingStatus

logger = logging.getLogger(__name__)


def invalidate_public_page(store: SchedulingStorePort, page_cache: PageCachePort, barbershop_id: str) -> None:
    """Ask the page cache to drop the barbershop's public page. Failures are only logged."""
    try:
        barbershop = store.get_barbershop(barbershop_id)
        if barbershop:
            page_cache.invalidate(barbershop.slug)
    except Exception as e:
        logger.warning("Page cache invalidation failed", extra={"reason": str(e)})


def resolve_customer(store: SchedulingStorePort, barbershop_id: str, name: str, phone: str) -> Customer:
    """Find the customer by normalized phone within the barbershop, creating it if absent."""
    existing = store.find_customer_by_phone(barbershop_id, phone)
    if existing:
        return existing
    try:
        return store.create_customer(barbershop_id, name, phone)
    except ConstraintViolation:
        # Another request created the same customer in between
        existing = store.find_customer_by_phone(barbershop_id, phone)
        if existing is None:
            raise
        return existing


class BookingWriter:
    """
    Commits a CONFIRMED booking for a slot the caller already picked.

    The slot is validated again right before writing: availability is
    recomputed, an active booking at the exact timestamp is looked up, and a
    uniqueness violation raised by the store on insert is reported as
    SLOT_ALREADY_BOOKED. Store failures propagate; callers own that boundary.
    """

    def __init__(
        self,
        store: SchedulingStorePort,
        page_cache: PageCachePort,
        available_times: GetAvailableTimesUseCase,
    ) -> None:
        self._store = store
        self._page_cache = page_cache
        self._available_times = available_times
        self._logger = logging.getLogger(__name__)

    def write(
        self,
        barber: Barber,
        service: Service,
        start: datetime,
        customer: Callable[[], Customer],
    ) -> BookingOutcome:
        requested = format_hhmm(start)
        log_extra = {"barber_id": barber.id, "date": start.date().isoformat(), "time": requested}

        availability = self._available_times.compute(barber.id, start.date(), service.duration_minutes)
        if availability.error:
            return BookingOutcome(error=availability.error)

        if requested not in (availability.times or []):
            self._logger.info("Requested slot no longer available", extra={**log_extra, "code": "SLOT_NO_LONGER_AVAILABLE"})
            return BookingOutcome(error=slot_no_longer_available())

        if self._store.find_active_booking_at(barber.id, start) is not None:
            self._logger.info("Requested slot already booked", extra={**log_extra, "code": "SLOT_ALREADY_BOOKED"})
            return BookingOutcome(error=slot_already_booked())

        resolved_customer = customer()

        try:
            booking = self._store.create_booking(
                barbershop_id=barber.barbershop_id,
                barber_id=barber.id,
                service_id=service.id,
                customer_id=resolved_customer.id,
                start=start,
                duration_minutes=service.duration_minutes,
                status=BookingStatus.CONFIRMED,
            )
        except ConstraintViolation as e:
            self._logger.info(
                "Concurrent booking won the slot",
                extra={**log_extra, "code": "SLOT_ALREADY_BOOKED", "reason": e.constraint},
            )
            return BookingOutcome(error=slot_already_booked())

        self._logger.info("Booking confirmed", extra={**log_extra, "booking_id": booking.id})
        invalidate_public_page(self._store, self._page_cache, barber.barbershop_id)
        return BookingOutcome(booking_id=booking.id)
