"""
Tests for the JSON file store used in local development.
"""

from __future__ import annotations

import os
import tempfile
from datetime import time

import pytest

from conftest import MONDAY, TZ, build_shop

from barber_booking.application.exceptions import ConstraintViolation, PersistenceUnavailableError
from barber_booking.application.utils.date_parser import at_time, day_bounds
from barber_booking.domain.entities.booking import BookingStatus
from barber_booking.infrastructure.store.json_store import JsonSchedulingStore


def _seed(store: JsonSchedulingStore):
    shop = store.create_barbershop(slug="corner-cuts", name="Corner Cuts")
    barber = store.create_barber(shop.id, "Joe", "Classic cuts", {"monday": ["09:00", "10:00"]})
    service = store.create_service(shop.id, "Haircut", 30, price=45.0)
    customer = store.create_customer(shop.id, "Ana", "11988887777")
    booking = store.create_booking(
        shop.id, barber.id, service.id, customer.id, at_time(MONDAY, time(9, 0), TZ), 30
    )
    return shop, barber, booking


def test_state_survives_a_restart():
    """Everything written is read back by a new store on the same file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "store.json")
        shop, barber, booking = _seed(JsonSchedulingStore(path))

        reopened = JsonSchedulingStore(path)

        assert reopened.get_barbershop(shop.id).slug == "corner-cuts"
        assert reopened.get_barber_availability(barber.id) == {"monday": ["09:00", "10:00"]}
        assert reopened.find_customer_by_phone(shop.id, "11988887777").name == "Ana"
        restored = reopened.get_booking(booking.id)
        assert restored.start == booking.start
        assert restored.status == BookingStatus.CONFIRMED
        assert restored.created_at is not None
        start, end = day_bounds(MONDAY, TZ)
        assert [b.id for b in reopened.list_active_bookings(barber.id, start, end)] == [booking.id]


def test_constraints_hold_after_a_restart():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "store.json")
        shop, barber, booking = _seed(JsonSchedulingStore(path))
        reopened = JsonSchedulingStore(path)

        with pytest.raises(ConstraintViolation):
            reopened.create_booking(shop.id, barber.id, booking.service_id, booking.customer_id, booking.start, 30)
        with pytest.raises(ConstraintViolation):
            reopened.create_customer(shop.id, "Ana again", "11988887777")


def test_status_update_is_persisted():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "store.json")
        store = JsonSchedulingStore(path)
        _, _, booking = _seed(store)

        store.update_booking_status(booking.id, BookingStatus.CANCELED)

        assert JsonSchedulingStore(path).get_booking(booking.id).status == BookingStatus.CANCELED


def test_writes_leave_no_temp_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "store.json")
        _seed(JsonSchedulingStore(path))
        assert os.listdir(tmpdir) == ["store.json"]


def test_corrupted_file_is_not_silently_replaced():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "store.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write("{not json")

        with pytest.raises(PersistenceUnavailableError):
            JsonSchedulingStore(path)


def _failing_save():
    raise PersistenceUnavailableError("disk full")


def test_failed_save_rolls_back_the_write(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "store.json")
        store = JsonSchedulingStore(path)
        shop, barber, booking = _seed(store)
        start = at_time(MONDAY, time(10, 0), TZ)

        monkeypatch.setattr(store, "_save", _failing_save)
        with pytest.raises(PersistenceUnavailableError):
            store.create_booking(shop.id, barber.id, booking.service_id, booking.customer_id, start, 30)
        with pytest.raises(PersistenceUnavailableError):
            store.update_booking_status(booking.id, BookingStatus.CANCELED)
        monkeypatch.undo()

        day_start, day_end = day_bounds(MONDAY, TZ)
        assert [b.id for b in store.list_active_bookings(barber.id, day_start, day_end)] == [booking.id]
        assert store.get_booking(booking.id).status == BookingStatus.CONFIRMED
        retried = store.create_booking(shop.id, barber.id, booking.service_id, booking.customer_id, start, 30)
        assert JsonSchedulingStore(path).get_booking(retried.id).start == start


def test_failed_save_keeps_the_slot_bookable(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "store.json")
        shop = build_shop(JsonSchedulingStore(path))

        monkeypatch.setattr(shop.store, "_save", _failing_save)
        failed = shop.confirm.execute(shop.barber.id, shop.service.id, "Ana", "11988887777", MONDAY, "10:00")
        monkeypatch.undo()

        assert failed.error.code == "SERVICE_UNAVAILABLE"
        assert "10:00" in shop.available_times.execute(shop.barber.id, MONDAY, 30).times
        assert shop.store.find_customer_by_phone(shop.barbershop.id, "11988887777") is None

        outcome = shop.confirm.execute(shop.barber.id, shop.service.id, "Ana", "11988887777", MONDAY, "10:00")
        assert outcome.ok
        assert JsonSchedulingStore(path).get_booking(outcome.booking_id).customer_id is not None
