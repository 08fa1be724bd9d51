from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime
from zoneinfo import ZoneInfo

from barber_booking.application.dto.outcomes import BookingOutcome, OperationError
from barber_booking.application.ports.scheduling_store import SchedulingStorePort
from barber_booking.application.use_cases.booking_writer import BookingWriter, resolve_customer
from barber_booking.application.utils.date_parser import (
    at_time,
    normalize_phone,
    parse_calendar_date,
    parse_hhmm,
)


class ConfirmBookingUseCase:
    """Public booking page flow: a customer books a barber for a service at date+time."""

    def __init__(
        self,
        store: SchedulingStorePort,
        writer: BookingWriter,
        timezone: ZoneInfo,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._writer = writer
        self._timezone = timezone
        self._now = now or (lambda: datetime.now(timezone))
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        barber_id: str,
        service_id: str,
        customer_name: str,
        customer_phone: str,
        target_date: date | str,
        time: str,
    ) -> BookingOutcome:
        if not barber_id:
            return _invalid("FIELD_REQUIRED", "Barber is required.", "barber_id")
        if not service_id:
            return _invalid("FIELD_REQUIRED", "Service is required.", "service_id")

        name = (customer_name or "").strip()
        phone = normalize_phone(customer_phone)
        if not name:
            return _invalid("INVALID_CUSTOMER", "Customer name is required.", "customer_name")
        if not phone:
            return _invalid("INVALID_CUSTOMER", "Customer phone is required.", "customer_phone")

        parsed_date = parse_calendar_date(target_date)
        if parsed_date is None:
            return _invalid("INVALID_DATE", "Date must be formatted as YYYY-MM-DD.", "date")
        parsed_time = parse_hhmm(time)
        if parsed_time is None:
            return _invalid("INVALID_TIME", "Time must be formatted as HH:MM.", "time")

        start = at_time(parsed_date, parsed_time, self._timezone)
        if start < self._now():
            return _invalid("DATE_IN_PAST", "Bookings cannot be made for a past date or time.", "date")

        try:
            barber = self._store.get_barber(barber_id)
            if barber is None:
                return BookingOutcome(error=OperationError.not_found("BARBER_NOT_FOUND", "Barber not found."))

            service = self._store.get_service(service_id)
            if service is None or service.barbershop_id != barber.barbershop_id:
                return BookingOutcome(error=OperationError.not_found("SERVICE_NOT_FOUND", "Service not found."))

            return self._writer.write(
                barber=barber,
                service=service,
                start=start,
                customer=lambda: resolve_customer(self._store, barber.barbershop_id, name, phone),
            )
        except Exception as e:
            self._logger.exception(
                "Error confirming booking",
                extra={"barber_id": barber_id, "date": parsed_date.isoformat(), "time": time, "reason": str(e)},
            )
            return BookingOutcome(error=OperationError.unavailable())


def _invalid(code: str, message: str, field: str) -> BookingOutcome:
    return BookingOutcome(error=OperationError.validation(code, message, field))
