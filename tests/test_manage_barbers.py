from __future__ import annotations

import pytest

from conftest import MONDAY

from barber_booking.application.dto.outcomes import ErrorKind
from barber_booking.application.use_cases.manage_barbers import ManageBarbersUseCase
from barber_booking.application.utils.weekly_schedule import DayWindow
from barber_booking.core.config import Settings
from barber_booking.domain.entities.booking import BookingStatus

DEFAULTS = Settings().DEFAULT_AVAILABILITY


@pytest.fixture
def manage(shop):
    return ManageBarbersUseCase(
        store=shop.store,
        page_cache=shop.page_cache,
        default_availability=DEFAULTS,
        schedule_interval_minutes=45,
    )


def test_new_barber_gets_default_availability(shop, manage):
    outcome = manage.create_barber(shop.barbershop.id, "  Carl  ", "Fades")

    assert outcome.ok
    barber = shop.store.get_barber(outcome.entity_id)
    assert barber.name == "Carl"
    assert barber.availability == DEFAULTS
    assert barber.availability is not DEFAULTS
    assert shop.available_times.execute(barber.id, MONDAY, 60).times[0] == "09:00"


def test_barber_validation(shop, manage):
    assert manage.create_barber(shop.barbershop.id, "C").error.code == "INVALID_BARBER"
    assert manage.create_barber(shop.barbershop.id, "Carl", "x" * 501).error.field == "description"
    assert manage.create_barber("missing", "Carl").error.code == "BARBERSHOP_NOT_FOUND"


def test_update_replaces_the_whole_week(shop, manage):
    outcome = manage.update_availability(shop.barbershop.id, shop.barber.id, {"tuesday": ["10:00"]})

    assert outcome.ok
    assert shop.store.get_barber_availability(shop.barber.id) == {"tuesday": ["10:00"]}
    assert shop.available_times.execute(shop.barber.id, MONDAY, 30).times == []
    assert shop.page_cache.invalidated == ["corner-cuts"]


def test_invalid_availability_is_rejected(shop, manage):
    outcome = manage.update_availability(shop.barbershop.id, shop.barber.id, {"monday": ["9am"]})
    assert outcome.error.code == "INVALID_SCHEDULE_FORMAT"
    assert outcome.error.field == "monday"
    assert shop.store.get_barber(shop.barber.id).availability["monday"]["start"] == "09:00"


def test_barber_of_another_barbershop_is_not_found(shop, manage):
    other = shop.store.create_barbershop(slug="elsewhere", name="Elsewhere")
    outcome = manage.update_availability(other.id, shop.barber.id, {"monday": ["10:00"]})
    assert outcome.error.code == "BARBER_NOT_FOUND"


def test_weekly_windows_are_stored_as_start_times(shop, manage):
    windows = {
        "monday": DayWindow(enabled=True, start="09:00", end="11:00", lunch_start="10:00", lunch_end="10:30"),
        "sunday": DayWindow(enabled=False),
    }
    outcome = manage.update_weekly_windows(shop.barbershop.id, shop.barber.id, windows, interval_minutes=30)

    assert outcome.ok
    assert shop.store.get_barber_availability(shop.barber.id) == {
        "monday": ["09:00", "09:30", "10:30"],
        "sunday": [],
    }
    assert shop.available_times.execute(shop.barber.id, MONDAY, 30).times == ["09:00", "09:30", "10:30"]


def test_weekly_windows_with_bad_times_are_rejected(shop, manage):
    windows = {"monday": DayWindow(enabled=True, start="nine")}
    outcome = manage.update_weekly_windows(shop.barbershop.id, shop.barber.id, windows)
    assert outcome.error.code == "INVALID_SCHEDULE_FORMAT"
    assert outcome.error.field == "windows"


def test_editor_windows_follow_the_stored_interval(shop, manage):
    windows, error = manage.editor_windows(shop.barbershop.id, shop.barber.id)

    assert error is None
    assert windows["monday"] == DayWindow(enabled=True, start="09:00", end="12:00")
    assert windows["tuesday"].enabled is True
    assert windows["saturday"].enabled is False


def test_editor_windows_for_unknown_barber(shop, manage):
    windows, error = manage.editor_windows(shop.barbershop.id, "missing")
    assert windows is None
    assert error.code == "BARBER_NOT_FOUND"


def test_update_barber_details(shop, manage):
    outcome = manage.update_barber(shop.barbershop.id, shop.barber.id, " Joseph ", "Hot towel shaves")

    assert outcome.ok
    barber = shop.store.get_barber(shop.barber.id)
    assert (barber.name, barber.description) == ("Joseph", "Hot towel shaves")
    assert barber.availability == shop.barber.availability
    assert shop.page_cache.invalidated == ["corner-cuts"]


def test_update_barber_checks_input_and_ownership(shop, manage):
    other = shop.store.create_barbershop(slug="elsewhere", name="Elsewhere")
    assert manage.update_barber(shop.barbershop.id, shop.barber.id, "J").error.code == "INVALID_BARBER"
    assert manage.update_barber(other.id, shop.barber.id, "Joseph").error.code == "BARBER_NOT_FOUND"
    assert shop.store.get_barber(shop.barber.id).name == "Joe"


def test_delete_barber_without_bookings(shop, manage):
    carl = manage.create_barber(shop.barbershop.id, "Carl").entity_id
    shop.page_cache.invalidated.clear()

    outcome = manage.delete_barber(shop.barbershop.id, carl)

    assert outcome.ok
    assert shop.store.get_barber(carl) is None
    assert shop.page_cache.invalidated == ["corner-cuts"]


def test_barber_with_bookings_is_not_deleted(shop, manage):
    booked = shop.confirm.execute(shop.barber.id, shop.service.id, "Ana", "11988887777", MONDAY, "10:00")
    shop.store.update_booking_status(booked.booking_id, BookingStatus.CANCELED)

    outcome = manage.delete_barber(shop.barbershop.id, shop.barber.id)

    assert outcome.error.code == "BARBER_HAS_BOOKINGS"
    assert outcome.error.kind == ErrorKind.CONFLICT
    assert shop.store.get_barber(shop.barber.id) is not None
