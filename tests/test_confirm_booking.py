from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from conftest import MONDAY, TZ, build_shop

from barber_booking.application.dto.outcomes import SLOT_ALREADY_BOOKED, SLOT_NO_LONGER_AVAILABLE, ErrorKind
from barber_booking.application.exceptions import PersistenceUnavailableError
from barber_booking.application.ports.page_cache import PageCachePort
from barber_booking.application.use_cases.booking_writer import BookingWriter
from barber_booking.application.utils.date_parser import at_time, parse_hhmm
from barber_booking.domain.entities.booking import BookingStatus
from barber_booking.infrastructure.store.memory_store import MemorySchedulingStore


class StaleReadStore(MemorySchedulingStore):
    """Reads that miss bookings committed by another request."""

    def __init__(self, hide_exact_lookup: bool = False) -> None:
        super().__init__()
        self.hide_exact_lookup = hide_exact_lookup

    def list_active_bookings(self, barber_id, start_inclusive, end_inclusive):
        return []

    def find_active_booking_at(self, barber_id, start):
        if self.hide_exact_lookup:
            return None
        return super().find_active_booking_at(barber_id, start)


class BarrierStore(MemorySchedulingStore):
    """Holds every insert until all racing requests have passed their checks."""

    def __init__(self, parties: int) -> None:
        super().__init__()
        self.barrier = threading.Barrier(parties)

    def create_booking(self, *args, **kwargs):
        self.barrier.wait(timeout=5)
        return super().create_booking(*args, **kwargs)


class FailingPageCache(PageCachePort):
    def invalidate(self, slug: str) -> None:
        raise RuntimeError("revalidation endpoint down")


def _confirm(shop, time="10:00", phone="(11) 98888-7777", name="Ana"):
    return shop.confirm.execute(
        barber_id=shop.barber.id,
        service_id=shop.service.id,
        customer_name=name,
        customer_phone=phone,
        target_date="2030-01-07",
        time=time,
    )


def test_booking_is_confirmed(shop):
    outcome = _confirm(shop)

    assert outcome.ok
    booking = shop.store.get_booking(outcome.booking_id)
    assert booking.status == BookingStatus.CONFIRMED
    assert booking.start == at_time(MONDAY, parse_hhmm("10:00"), TZ)
    assert booking.duration_minutes == 30
    customer = shop.store.get_customer(booking.customer_id)
    assert customer.phone == "11988887777"
    assert shop.page_cache.invalidated == ["corner-cuts"]


def test_booked_time_disappears_from_availability(shop):
    _confirm(shop)
    times = shop.available_times.execute(shop.barber.id, MONDAY, 30).times
    assert "10:00" not in times


def test_second_request_for_the_same_time_is_rejected(shop):
    assert _confirm(shop).ok
    outcome = _confirm(shop, phone="11977776666", name="Bia")
    assert outcome.error.code == SLOT_NO_LONGER_AVAILABLE
    assert outcome.error.kind == ErrorKind.CONFLICT


def test_time_outside_the_schedule_is_rejected(shop):
    assert _confirm(shop, time="15:00").error.code == SLOT_NO_LONGER_AVAILABLE


def test_existing_booking_missed_by_availability_is_caught():
    shop = build_shop(StaleReadStore())
    assert _confirm(shop).ok
    outcome = _confirm(shop, phone="11977776666")
    assert outcome.error.code == SLOT_ALREADY_BOOKED


def test_unique_constraint_on_insert_is_reported_as_already_booked():
    shop = build_shop(StaleReadStore(hide_exact_lookup=True))
    assert _confirm(shop).ok
    outcome = _confirm(shop, phone="11977776666")
    assert outcome.error.code == SLOT_ALREADY_BOOKED
    start = at_time(MONDAY, parse_hhmm("10:00"), TZ)
    assert len(MemorySchedulingStore.list_active_bookings(shop.store, shop.barber.id, start, start)) == 1


def test_concurrent_requests_book_the_slot_once():
    shop = build_shop(BarrierStore(parties=2))
    phones = ["11911110000", "11922220000"]

    with ThreadPoolExecutor(max_workers=2) as pool:
        outcomes = list(pool.map(lambda phone: _confirm(shop, phone=phone), phones))

    assert sum(1 for o in outcomes if o.ok) == 1
    assert [o.error.code for o in outcomes if not o.ok] == [SLOT_ALREADY_BOOKED]
    start = at_time(MONDAY, parse_hhmm("10:00"), TZ)
    assert len(shop.store.list_active_bookings(shop.barber.id, start, start)) == 1


def test_returning_customer_is_reused(shop):
    first = _confirm(shop, time="09:00", phone="(11) 98888-7777")
    second = _confirm(shop, time="11:00", phone="11 98888 7777", name="Ana Maria")
    assert first.ok and second.ok
    a = shop.store.get_booking(first.booking_id)
    b = shop.store.get_booking(second.booking_id)
    assert a.customer_id == b.customer_id


def test_input_validation(shop):
    assert _confirm(shop, time="25:00").error.code == "INVALID_TIME"
    assert _confirm(shop, phone="--").error.code == "INVALID_CUSTOMER"
    assert _confirm(shop, name="  ").error.code == "INVALID_CUSTOMER"
    outcome = shop.confirm.execute(shop.barber.id, shop.service.id, "Ana", "11988887777", "2030-13-01", "10:00")
    assert outcome.error.code == "INVALID_DATE"
    assert outcome.error.field == "date"


def test_past_time_is_rejected(shop):
    outcome = shop.confirm.execute(shop.barber.id, shop.service.id, "Ana", "11988887777", "2029-12-31", "10:00")
    assert outcome.error.code == "DATE_IN_PAST"


def test_service_from_another_barbershop_is_not_found(shop):
    other = shop.store.create_barbershop(slug="elsewhere", name="Elsewhere")
    foreign = shop.store.create_service(other.id, "Shave", 30)
    outcome = shop.confirm.execute(shop.barber.id, foreign.id, "Ana", "11988887777", "2030-01-07", "10:00")
    assert outcome.error.code == "SERVICE_NOT_FOUND"


def test_unknown_barber(shop):
    outcome = shop.confirm.execute("missing", shop.service.id, "Ana", "11988887777", "2030-01-07", "10:00")
    assert outcome.error.code == "BARBER_NOT_FOUND"


def test_store_failure_is_a_generic_error(shop, monkeypatch):
    def boom(service_id):
        raise PersistenceUnavailableError("disk full")

    monkeypatch.setattr(shop.store, "get_service", boom)
    outcome = _confirm(shop)
    assert outcome.error.code == "SERVICE_UNAVAILABLE"
    assert outcome.error.kind == ErrorKind.UNAVAILABLE


def test_page_cache_failure_does_not_fail_the_booking(shop):
    writer = BookingWriter(store=shop.store, page_cache=FailingPageCache(), available_times=shop.available_times)
    start = at_time(MONDAY, parse_hhmm("10:00"), TZ)
    customer = shop.store.create_customer(shop.barbershop.id, "Ana", "11988887777")

    outcome = writer.write(shop.barber, shop.service, start, lambda: customer)

    assert outcome.ok
