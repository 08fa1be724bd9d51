from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from barber_booking.application.use_cases.booking_writer import BookingWriter
from barber_booking.application.use_cases.confirm_booking import ConfirmBookingUseCase
from barber_booking.application.use_cases.create_admin_booking import CreateAdminBookingUseCase
from barber_booking.application.use_cases.get_available_times import GetAvailableTimesUseCase
from barber_booking.domain.entities.barbershop import Barber, Barbershop, Service
from barber_booking.infrastructure.cache.mock_page_cache import MockPageCache
from barber_booking.infrastructure.store.memory_store import MemorySchedulingStore

TZ = ZoneInfo("America/Sao_Paulo")
MONDAY = date(2030, 1, 7)
NOW = datetime(2030, 1, 1, 8, 0, tzinfo=TZ)

MORNING = {"monday": {"available": True, "start": "09:00", "end": "12:00"}}


@dataclass
class Shop:
    store: MemorySchedulingStore
    page_cache: MockPageCache
    barbershop: Barbershop
    barber: Barber
    service: Service
    available_times: GetAvailableTimesUseCase
    writer: BookingWriter
    confirm: ConfirmBookingUseCase
    admin: CreateAdminBookingUseCase


def build_shop(store: MemorySchedulingStore, availability: dict | None = None, duration: int = 30) -> Shop:
    page_cache = MockPageCache()
    barbershop = store.create_barbershop(slug="corner-cuts", name="Corner Cuts")
    barber = store.create_barber(barbershop.id, "Joe", None, MORNING if availability is None else availability)
    service = store.create_service(barbershop.id, "Haircut", duration, price=45.0)
    available_times = GetAvailableTimesUseCase(store=store, timezone=TZ)
    writer = BookingWriter(store=store, page_cache=page_cache, available_times=available_times)
    return Shop(
        store=store,
        page_cache=page_cache,
        barbershop=barbershop,
        barber=barber,
        service=service,
        available_times=available_times,
        writer=writer,
        confirm=ConfirmBookingUseCase(store=store, writer=writer, timezone=TZ, now=lambda: NOW),
        admin=CreateAdminBookingUseCase(store=store, writer=writer, timezone=TZ),
    )


@pytest.fixture
def shop() -> Shop:
    return build_shop(MemorySchedulingStore())
