from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from zoneinfo import ZoneInfo

from barber_booking.application.dto.outcomes import AvailabilityOutcome, OperationError
from barber_booking.application.ports.scheduling_store import SchedulingStorePort
from barber_booking.application.utils.conflict_filter import filter_conflicts
from barber_booking.application.utils.date_parser import day_bounds, parse_calendar_date
from barber_booking.application.utils.schedule_normalizer import resolve_day_schedule, weekday_key
from barber_booking.application.utils.slot_generator import generate_candidate_slots
from barber_booking.domain.entities.schedule import Unrecognized


class GetAvailableTimesUseCase:
    def __init__(
        self,
        store: SchedulingStorePort,
        timezone: ZoneInfo,
    ) -> None:
        self._store = store
        self._timezone = timezone
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        barber_id: str,
        target_date: date | str,
        service_duration_minutes: int,
    ) -> AvailabilityOutcome:
        """
        Bookable "HH:MM" start times of a barber on a date.

        Input problems are reported before any store access. Store failures are
        logged and returned as a generic unavailable error.
        """
        parsed_date = parse_calendar_date(target_date)
        if parsed_date is None:
            return AvailabilityOutcome(
                error=OperationError.validation("INVALID_DATE", "Date must be formatted as YYYY-MM-DD.", "date")
            )
        duration_error = self.validate_duration(service_duration_minutes)
        if duration_error:
            return AvailabilityOutcome(error=duration_error)
        if not barber_id:
            return AvailabilityOutcome(
                error=OperationError.validation("FIELD_REQUIRED", "Barber is required.", "barber_id")
            )

        try:
            return self.compute(barber_id, parsed_date, service_duration_minutes)
        except Exception as e:
            self._logger.exception(
                "Error computing available times",
                extra={"barber_id": barber_id, "date": parsed_date.isoformat(), "reason": str(e)},
            )
            return AvailabilityOutcome(error=OperationError.unavailable())

    def validate_duration(self, duration_minutes: object) -> OperationError | None:
        if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int):
            return OperationError.validation(
                "INVALID_DURATION", "Service duration must be a whole number of minutes.", "service_duration"
            )
        if duration_minutes < 1:
            return OperationError.validation(
                "INVALID_DURATION", "Service duration must be at least 1 minute.", "service_duration"
            )
        return None

    def compute(self, barber_id: str, target_date: date, duration_minutes: int) -> AvailabilityOutcome:
        """Run normalize -> generate -> filter. Store errors propagate to the caller."""
        if self._store.get_barber(barber_id) is None:
            return AvailabilityOutcome(error=OperationError.not_found("BARBER_NOT_FOUND", "Barber not found."))

        weekly = self._store.get_barber_availability(barber_id)
        if weekly is None:
            return AvailabilityOutcome(
                error=OperationError.not_found(
                    "AVAILABILITY_NOT_CONFIGURED", "This barber has no working hours configured yet."
                )
            )
        if not isinstance(weekly, Mapping):
            return AvailabilityOutcome(error=self._invalid_format(barber_id, "availability", "not a mapping"))

        schedule = resolve_day_schedule(weekly, target_date)
        if isinstance(schedule, Unrecognized):
            day = weekday_key(target_date)
            return AvailabilityOutcome(error=self._invalid_format(barber_id, f"availability.{day}", schedule.reason))

        candidates = list(generate_candidate_slots(schedule, duration_minutes, target_date, self._timezone))
        if not candidates:
            return AvailabilityOutcome(times=[])

        day_start, day_end = day_bounds(target_date, self._timezone)
        bookings = self._store.list_active_bookings(barber_id, day_start, day_end)
        return AvailabilityOutcome(times=filter_conflicts(candidates, bookings))

    def _invalid_format(self, barber_id: str, field: str, reason: str) -> OperationError:
        self._logger.warning(
            "Unrecognized availability format",
            extra={"barber_id": barber_id, "reason": reason},
        )
        return OperationError.validation(
            "INVALID_SCHEDULE_FORMAT",
            "The barber's working hours are stored in an unrecognized format.",
            field,
        )
