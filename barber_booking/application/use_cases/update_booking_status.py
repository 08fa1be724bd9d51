from __future__ import annotations

import logging
from zoneinfo import ZoneInfo

from barber_booking.application.dto.outcomes import OperationError, OperationOutcome, slot_already_booked
from barber_booking.application.exceptions import ConstraintViolation
from barber_booking.application.ports.page_cache import PageCachePort
from barber_booking.application.ports.scheduling_store import SchedulingStorePort
from barber_booking.application.use_cases.booking_writer import invalidate_public_page
from barber_booking.application.utils.conflict_filter import conflicting_bookings
from barber_booking.application.utils.date_parser import day_bounds
from barber_booking.domain.entities.booking import ACTIVE_STATUSES, BookingStatus


class UpdateBookingStatusUseCase:
    def __init__(self, store: SchedulingStorePort, page_cache: PageCachePort, timezone: ZoneInfo) -> None:
        self._store = store
        self._page_cache = page_cache
        self._timezone = timezone
        self._logger = logging.getLogger(__name__)

    def execute(self, barbershop_id: str, booking_id: str, status: str) -> OperationOutcome:
        try:
            new_status = BookingStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in BookingStatus)
            return OperationOutcome(
                error=OperationError.validation("INVALID_STATUS", f"Status must be one of: {allowed}.", "status")
            )

        try:
            booking = self._store.get_booking(booking_id)
            if booking is None or booking.barbershop_id != barbershop_id:
                return OperationOutcome(error=OperationError.not_found("BOOKING_NOT_FOUND", "Booking not found."))

            if booking.status == new_status:
                return OperationOutcome(entity_id=booking.id)

            if new_status in ACTIVE_STATUSES and not booking.is_active:
                # Reactivating must not overlap anything booked since the cancellation
                day_start, day_end = day_bounds(booking.start.astimezone(self._timezone).date(), self._timezone)
                others = [
                    b
                    for b in self._store.list_active_bookings(booking.barber_id, day_start, day_end)
                    if b.id != booking.id
                ]
                if conflicting_bookings(booking.start, booking.end, others):
                    self._logger.info(
                        "Reactivation blocked by overlapping booking",
                        extra={"booking_id": booking.id, "code": "SLOT_ALREADY_BOOKED"},
                    )
                    return OperationOutcome(error=slot_already_booked())

            try:
                updated = self._store.update_booking_status(booking.id, new_status)
            except ConstraintViolation:
                return OperationOutcome(error=slot_already_booked())

            self._logger.info(
                "Booking status updated",
                extra={"booking_id": updated.id, "reason": f"{booking.status.value}->{new_status.value}"},
            )
            invalidate_public_page(self._store, self._page_cache, barbershop_id)
            return OperationOutcome(entity_id=updated.id)
        except Exception as e:
            self._logger.exception("Error updating booking status", extra={"booking_id": booking_id, "reason": str(e)})
            return OperationOutcome(error=OperationError.unavailable())
