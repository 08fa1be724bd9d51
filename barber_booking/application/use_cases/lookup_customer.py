from __future__ import annotations

import logging
from dataclasses import dataclass

from barber_booking.application.dto.outcomes import OperationError
from barber_booking.application.ports.scheduling_store import SchedulingStorePort
from barber_booking.application.utils.date_parser import normalize_phone

MIN_PHONE_DIGITS = 10


@dataclass(frozen=True)
class CustomerLookupOutcome:
    name: str | None = None
    error: OperationError | None = None


@dataclass
class LookupCustomerUseCase:
    """Prefill the booking form with a returning customer's name."""

    store: SchedulingStorePort

    def execute(self, barbershop_id: str, phone: str) -> CustomerLookupOutcome:
        normalized = normalize_phone(phone)
        if len(normalized) < MIN_PHONE_DIGITS:
            return CustomerLookupOutcome(name=None)

        try:
            customer = self.store.find_customer_by_phone(barbershop_id, normalized)
        except Exception as e:
            logging.getLogger(__name__).exception("Error looking up customer", extra={"reason": str(e)})
            return CustomerLookupOutcome(error=OperationError.unavailable())

        return CustomerLookupOutcome(name=customer.name if customer else None)
