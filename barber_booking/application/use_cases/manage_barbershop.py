from __future__ import annotations

import logging
import re

from barber_booking.application.dto.outcomes import OperationError, OperationOutcome
from barber_booking.application.exceptions import ConstraintViolation
from barber_booking.application.ports.page_cache import PageCachePort
from barber_booking.application.ports.scheduling_store import SchedulingStorePort
from barber_booking.application.use_cases.booking_writer import invalidate_public_page

_SLUG_PATTERN = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")

# (name, duration_minutes, price, description) seeded into every new barbershop
DEFAULT_SERVICES = (
    ("Haircut", 30, 35.0, "Classic clipper and scissor cut"),
    ("Beard", 20, 25.0, "Beard trim and shaping"),
    ("Haircut + Beard", 45, 50.0, "Full combo: haircut and beard"),
)


class ManageBarbershopUseCase:
    def __init__(self, store: SchedulingStorePort, page_cache: PageCachePort) -> None:
        self._store = store
        self._page_cache = page_cache
        self._logger = logging.getLogger(__name__)

    def create_barbershop(self, name: str, slug: str) -> OperationOutcome:
        """Create a barbershop with its public slug and the default service catalog."""
        clean_name = (name or "").strip()
        clean_slug = (slug or "").strip()
        if not 2 <= len(clean_name) <= 100:
            return _invalid("Name must be between 2 and 100 characters.", "name")
        if not 2 <= len(clean_slug) <= 50 or not _SLUG_PATTERN.fullmatch(clean_slug):
            return _invalid("Slug must be 2-50 lowercase letters, digits and single hyphens.", "slug")

        try:
            try:
                shop = self._store.create_barbershop(slug=clean_slug, name=clean_name)
            except ConstraintViolation:
                return OperationOutcome(
                    error=OperationError.conflict("SLUG_TAKEN", "This link is already in use. Pick another one.")
                )
            for service_name, duration, price, description in DEFAULT_SERVICES:
                self._store.create_service(shop.id, service_name, duration, price=price, description=description)
            self._logger.info("Barbershop created", extra={"reason": shop.slug})
            return OperationOutcome(entity_id=shop.id)
        except Exception as e:
            self._logger.exception("Error creating barbershop", extra={"reason": str(e)})
            return OperationOutcome(error=OperationError.unavailable())

    def update_barbershop(
        self,
        barbershop_id: str,
        name: str,
        address: str | None = None,
        phone: str | None = None,
    ) -> OperationOutcome:
        clean_name = (name or "").strip()
        if not 2 <= len(clean_name) <= 100:
            return _invalid("Name must be between 2 and 100 characters.", "name")

        try:
            if self._store.get_barbershop(barbershop_id) is None:
                return OperationOutcome(error=OperationError.not_found("BARBERSHOP_NOT_FOUND", "Barbershop not found."))
            self._store.update_barbershop(
                barbershop_id,
                clean_name,
                (address or "").strip() or None,
                (phone or "").strip() or None,
            )
            self._logger.info("Barbershop updated", extra={"reason": barbershop_id})
            invalidate_public_page(self._store, self._page_cache, barbershop_id)
            return OperationOutcome(entity_id=barbershop_id)
        except Exception as e:
            self._logger.exception("Error updating barbershop", extra={"reason": str(e)})
            return OperationOutcome(error=OperationError.unavailable())


def _invalid(message: str, field: str) -> OperationOutcome:
    return OperationOutcome(error=OperationError.validation("INVALID_BARBERSHOP", message, field))
