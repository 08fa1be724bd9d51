from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from functools import partial
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
from barber_booking.domain.entities.barbershop import Customer


class CreateAdminBookingUseCase:
    """Owner dashboard flow: book for an existing customer or for a new name + phone."""

    def __init__(self, store: SchedulingStorePort, writer: BookingWriter, timezone: ZoneInfo) -> None:
        self._store = store
        self._writer = writer
        self._timezone = timezone
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        barbershop_id: str,
        barber_id: str,
        service_id: str,
        target_date: date | str,
        time: str,
        customer_id: str | None = None,
        new_customer_name: str | None = None,
        new_customer_phone: str | None = None,
    ) -> BookingOutcome:
        if not service_id:
            return _invalid("FIELD_REQUIRED", "Service is required.", "service_id")
        if not barber_id:
            return _invalid("FIELD_REQUIRED", "Barber is required.", "barber_id")
        parsed_date = parse_calendar_date(target_date)
        if parsed_date is None:
            return _invalid("INVALID_DATE", "Date must be formatted as YYYY-MM-DD.", "date")
        parsed_time = parse_hhmm(time)
        if parsed_time is None:
            return _invalid("INVALID_TIME", "Time must be formatted as HH:MM.", "time")

        name = (new_customer_name or "").strip()
        phone = normalize_phone(new_customer_phone)
        if not customer_id and not (name and phone):
            return _invalid(
                "INVALID_CUSTOMER",
                "Pick an existing customer or provide the new customer's name and phone.",
                "customer",
            )

        try:
            barbershop = self._store.get_barbershop(barbershop_id)
            if barbershop is None:
                return _not_found("BARBERSHOP_NOT_FOUND", "Barbershop not found.")

            barber = self._store.get_barber(barber_id)
            service = self._store.get_service(service_id)
            if barber is None or barber.barbershop_id != barbershop.id:
                return _not_found("BARBER_NOT_FOUND", "Barber not found.")
            if service is None or service.barbershop_id != barbershop.id:
                return _not_found("SERVICE_NOT_FOUND", "Service not found.")

            resolve: Callable[[], Customer] = partial(resolve_customer, self._store, barbershop.id, name, phone)
            if customer_id:
                existing = self._store.get_customer(customer_id)
                if existing is None or existing.barbershop_id != barbershop.id:
                    return _not_found("CUSTOMER_NOT_FOUND", "Customer not found.")
                resolve = partial(_identity, existing)

            return self._writer.write(
                barber=barber,
                service=service,
                start=at_time(parsed_date, parsed_time, self._timezone),
                customer=resolve,
            )
        except Exception as e:
            self._logger.exception(
                "Error creating admin booking",
                extra={"barber_id": barber_id, "date": parsed_date.isoformat(), "time": time, "reason": str(e)},
            )
            return BookingOutcome(error=OperationError.unavailable())


def _identity(customer: Customer) -> Customer:
    return customer


def _invalid(code: str, message: str, field: str) -> BookingOutcome:
    return BookingOutcome(error=OperationError.validation(code, message, field))


def _not_found(code: str, message: str) -> BookingOutcome:
    return BookingOutcome(error=OperationError.not_found(code, message))
