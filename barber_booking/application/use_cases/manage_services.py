from __future__ import annotations

import logging

from barber_booking.application.dto.outcomes import OperationError, OperationOutcome
from barber_booking.application.exceptions import ConstraintViolation
from barber_booking.application.ports.page_cache import PageCachePort
from barber_booking.application.ports.scheduling_store import SchedulingStorePort
from barber_booking.application.use_cases.booking_writer import invalidate_public_page


class ManageServicesUseCase:
    """Owner-side catalog of services. The duration drives slot computation."""

    def __init__(
        self,
        store: SchedulingStorePort,
        page_cache: PageCachePort,
        max_duration_minutes: int = 480,
    ) -> None:
        self._store = store
        self._page_cache = page_cache
        self._max_duration_minutes = max_duration_minutes
        self._logger = logging.getLogger(__name__)

    def upsert_service(
        self,
        barbershop_id: str,
        name: str,
        duration_minutes: int,
        price: float = 0.0,
        description: str | None = None,
        service_id: str | None = None,
    ) -> OperationOutcome:
        """Create a service, or update it when service_id is given."""
        clean_name = (name or "").strip()
        problem = self._problem(clean_name, duration_minutes, price, description)
        if problem:
            return OperationOutcome(error=problem)

        try:
            if self._store.get_barbershop(barbershop_id) is None:
                return _not_found("BARBERSHOP_NOT_FOUND", "Barbershop not found.")

            if service_id:
                existing = self._store.get_service(service_id)
                if existing is None or existing.barbershop_id != barbershop_id:
                    return _not_found("SERVICE_NOT_FOUND", "Service not found.")
                service = self._store.update_service(
                    existing.id, clean_name, duration_minutes, float(price), description
                )
                self._logger.info("Service updated", extra={"reason": service.id})
            else:
                service = self._store.create_service(
                    barbershop_id, clean_name, duration_minutes, price=float(price), description=description
                )
                self._logger.info("Service created", extra={"reason": service.id})

            invalidate_public_page(self._store, self._page_cache, barbershop_id)
            return OperationOutcome(entity_id=service.id)
        except Exception as e:
            self._logger.exception("Error saving service", extra={"reason": str(e)})
            return OperationOutcome(error=OperationError.unavailable())

    def delete_service(self, barbershop_id: str, service_id: str) -> OperationOutcome:
        try:
            service = self._store.get_service(service_id)
            if service is None or service.barbershop_id != barbershop_id:
                return _not_found("SERVICE_NOT_FOUND", "Service not found.")
            try:
                self._store.delete_service(service.id)
            except ConstraintViolation:
                return OperationOutcome(
                    error=OperationError.conflict(
                        "SERVICE_HAS_BOOKINGS", "This service has bookings and cannot be deleted."
                    )
                )
            self._logger.info("Service deleted", extra={"reason": service.id})
            invalidate_public_page(self._store, self._page_cache, barbershop_id)
            return OperationOutcome(entity_id=service.id)
        except Exception as e:
            self._logger.exception("Error deleting service", extra={"reason": str(e)})
            return OperationOutcome(error=OperationError.unavailable())

    def _problem(
        self, name: str, duration_minutes: object, price: object, description: str | None
    ) -> OperationError | None:
        if not 2 <= len(name) <= 100:
            return OperationError.validation("INVALID_SERVICE", "Name must be between 2 and 100 characters.", "name")
        if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int):
            return OperationError.validation(
                "INVALID_DURATION", "Duration must be a whole number of minutes.", "duration_minutes"
            )
        if not 1 <= duration_minutes <= self._max_duration_minutes:
            return OperationError.validation(
                "INVALID_DURATION",
                f"Duration must be between 1 and {self._max_duration_minutes} minutes.",
                "duration_minutes",
            )
        if isinstance(price, bool) or not isinstance(price, (int, float)) or price < 0:
            return OperationError.validation("INVALID_SERVICE", "Price must be zero or more.", "price")
        if description is not None and len(description) > 500:
            return OperationError.validation(
                "INVALID_SERVICE", "Description cannot exceed 500 characters.", "description"
            )
        return None


def _not_found(code: str, message: str) -> OperationOutcome:
    return OperationOutcome(error=OperationError.not_found(code, message))
