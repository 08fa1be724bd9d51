from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from barber_booking.application.dto.outcomes import OperationError, OperationOutcome
from barber_booking.application.exceptions import ConstraintViolation
from barber_booking.application.ports.page_cache import PageCachePort
from barber_booking.application.ports.scheduling_store import SchedulingStorePort
from barber_booking.application.use_cases.booking_writer import invalidate_public_page
from barber_booking.application.utils.schedule_normalizer import (
    normalize_day_config,
    validate_weekly_availability,
)
from barber_booking.application.utils.weekly_schedule import (
    DayWindow,
    build_weekly_slots,
    window_from_interval,
)
from barber_booking.domain.entities.barbershop import Barber
from barber_booking.domain.entities.schedule import WEEKDAYS, Interval


class ManageBarbersUseCase:
    def __init__(
        self,
        store: SchedulingStorePort,
        page_cache: PageCachePort,
        default_availability: Mapping[str, Any],
        schedule_interval_minutes: int = 45,
    ) -> None:
        self._store = store
        self._page_cache = page_cache
        self._default_availability = default_availability
        self._schedule_interval_minutes = schedule_interval_minutes
        self._logger = logging.getLogger(__name__)

    def create_barber(self, barbershop_id: str, name: str, description: str | None = None) -> OperationOutcome:
        """New barbers start with a copy of the configured default availability."""
        clean_name = (name or "").strip()
        problem = _barber_problem(clean_name, description)
        if problem:
            return problem

        try:
            if self._store.get_barbershop(barbershop_id) is None:
                return _not_found("BARBERSHOP_NOT_FOUND", "Barbershop not found.")
            barber = self._store.create_barber(
                barbershop_id=barbershop_id,
                name=clean_name,
                description=description,
                availability=copy.deepcopy(dict(self._default_availability)),
            )
            self._logger.info("Barber created", extra={"barber_id": barber.id})
            invalidate_public_page(self._store, self._page_cache, barbershop_id)
            return OperationOutcome(entity_id=barber.id)
        except Exception as e:
            self._logger.exception("Error creating barber", extra={"reason": str(e)})
            return OperationOutcome(error=OperationError.unavailable())

    def update_barber(
        self, barbershop_id: str, barber_id: str, name: str, description: str | None = None
    ) -> OperationOutcome:
        clean_name = (name or "").strip()
        problem = _barber_problem(clean_name, description)
        if problem:
            return problem

        try:
            lookup = self._owned_barber(barbershop_id, barber_id)
            if isinstance(lookup, OperationOutcome):
                return lookup
            self._store.update_barber(lookup.id, clean_name, description)
            self._logger.info("Barber updated", extra={"barber_id": lookup.id})
            invalidate_public_page(self._store, self._page_cache, barbershop_id)
            return OperationOutcome(entity_id=lookup.id)
        except Exception as e:
            self._logger.exception("Error updating barber", extra={"barber_id": barber_id, "reason": str(e)})
            return OperationOutcome(error=OperationError.unavailable())

    def delete_barber(self, barbershop_id: str, barber_id: str) -> OperationOutcome:
        """Barbers with booking history are kept; the store refuses the delete."""
        try:
            lookup = self._owned_barber(barbershop_id, barber_id)
            if isinstance(lookup, OperationOutcome):
                return lookup
            try:
                self._store.delete_barber(lookup.id)
            except ConstraintViolation:
                return OperationOutcome(
                    error=OperationError.conflict(
                        "BARBER_HAS_BOOKINGS", "This barber has bookings and cannot be deleted."
                    )
                )
            self._logger.info("Barber deleted", extra={"barber_id": lookup.id})
            invalidate_public_page(self._store, self._page_cache, barbershop_id)
            return OperationOutcome(entity_id=lookup.id)
        except Exception as e:
            self._logger.exception("Error deleting barber", extra={"barber_id": barber_id, "reason": str(e)})
            return OperationOutcome(error=OperationError.unavailable())

    def update_availability(
        self,
        barbershop_id: str,
        barber_id: str,
        availability: Mapping[str, Any],
    ) -> OperationOutcome:
        """Replace the barber's whole weekly availability."""
        problems = validate_weekly_availability(availability)
        if problems:
            field, message = next(iter(problems.items()))
            return _invalid("INVALID_SCHEDULE_FORMAT", message, field)

        try:
            lookup = self._owned_barber(barbershop_id, barber_id)
            if isinstance(lookup, OperationOutcome):
                return lookup
            self._store.update_barber_availability(lookup.id, dict(availability))
            self._logger.info("Barber availability replaced", extra={"barber_id": lookup.id})
            invalidate_public_page(self._store, self._page_cache, barbershop_id)
            return OperationOutcome(entity_id=lookup.id)
        except Exception as e:
            self._logger.exception("Error updating availability", extra={"barber_id": barber_id, "reason": str(e)})
            return OperationOutcome(error=OperationError.unavailable())

    def update_weekly_windows(
        self,
        barbershop_id: str,
        barber_id: str,
        windows: Mapping[str, DayWindow],
        interval_minutes: int | None = None,
    ) -> OperationOutcome:
        """Save working windows from the schedule editor as enumerated start times."""
        try:
            slots = build_weekly_slots(windows, interval_minutes or self._schedule_interval_minutes)
        except ValueError as e:
            return _invalid("INVALID_SCHEDULE_FORMAT", str(e), "windows")
        return self.update_availability(barbershop_id, barber_id, slots)

    def editor_windows(
        self, barbershop_id: str, barber_id: str
    ) -> tuple[dict[str, DayWindow] | None, OperationError | None]:
        """Editor windows prefilled from days stored in the interval shape; other days get defaults."""
        try:
            lookup = self._owned_barber(barbershop_id, barber_id)
        except Exception as e:
            self._logger.exception("Error loading barber", extra={"barber_id": barber_id, "reason": str(e)})
            return None, OperationError.unavailable()
        if isinstance(lookup, OperationOutcome):
            return None, lookup.error

        weekly = lookup.availability if isinstance(lookup.availability, Mapping) else {}
        windows: dict[str, DayWindow] = {}
        for day in WEEKDAYS:
            schedule = normalize_day_config(weekly.get(day))
            if isinstance(schedule, Interval):
                windows[day] = window_from_interval(schedule)
            else:
                windows[day] = DayWindow(enabled=day not in ("saturday", "sunday"))
        return windows, None

    def _owned_barber(self, barbershop_id: str, barber_id: str) -> Barber | OperationOutcome:
        barber = self._store.get_barber(barber_id)
        if barber is None or barber.barbershop_id != barbershop_id:
            return _not_found("BARBER_NOT_FOUND", "Barber not found.")
        return barber


def _barber_problem(name: str, description: str | None) -> OperationOutcome | None:
    if not 2 <= len(name) <= 100:
        return _invalid("INVALID_BARBER", "Name must be between 2 and 100 characters.", "name")
    if description is not None and len(description) > 500:
        return _invalid("INVALID_BARBER", "Description cannot exceed 500 characters.", "description")
    return None


def _invalid(code: str, message: str, field: str) -> OperationOutcome:
    return OperationOutcome(error=OperationError.validation(code, message, field))


def _not_found(code: str, message: str) -> OperationOutcome:
    return OperationOutcome(error=OperationError.not_found(code, message))
