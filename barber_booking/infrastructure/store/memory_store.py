from __future__ import annotations

import copy
import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from barber_booking.application.exceptions import ConstraintViolation
from barber_booking.application.ports.scheduling_store import SchedulingStorePort
from barber_booking.domain.entities.barbershop import Barber, Barbershop, Customer, Service
from barber_booking.domain.entities.booking import Booking, BookingStatus


class MemorySchedulingStore(SchedulingStorePort):
    """
    In-process store. A single lock makes each write atomic, which is what
    backs the uniqueness rules that the booking race guard relies on.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._barbershops: dict[str, Barbershop] = {}
        self._barbers: dict[str, Barber] = {}
        self._services: dict[str, Service] = {}
        self._customers: dict[str, Customer] = {}
        self._bookings: dict[str, Booking] = {}

    def get_barbershop(self, barbershop_id: str) -> Barbershop | None:
        return self._barbershops.get(barbershop_id)

    def create_barbershop(self, slug: str, name: str) -> Barbershop:
        with self._lock:
            if any(shop.slug == slug for shop in self._barbershops.values()):
                raise ConstraintViolation("barbershop_slug_unique")
            shop = Barbershop(id=_new_id(), slug=slug, name=name)
            self._barbershops[shop.id] = shop
            return shop

    def update_barbershop(
        self, barbershop_id: str, name: str, address: str | None, phone: str | None
    ) -> Barbershop:
        with self._lock:
            updated = replace(self._barbershops[barbershop_id], name=name, address=address, phone=phone)
            self._barbershops[barbershop_id] = updated
            return updated

    def get_barber(self, barber_id: str) -> Barber | None:
        return self._barbers.get(barber_id)

    def get_barber_availability(self, barber_id: str) -> dict[str, Any] | None:
        barber = self._barbers.get(barber_id)
        if barber is None or barber.availability is None:
            return None
        return copy.deepcopy(barber.availability)

    def create_barber(
        self,
        barbershop_id: str,
        name: str,
        description: str | None,
        availability: dict[str, Any] | None,
    ) -> Barber:
        barber = Barber(
            id=_new_id(),
            barbershop_id=barbershop_id,
            name=name,
            description=description,
            availability=copy.deepcopy(availability),
        )
        with self._lock:
            self._barbers[barber.id] = barber
        return barber

    def update_barber_availability(self, barber_id: str, availability: dict[str, Any]) -> Barber:
        with self._lock:
            barber = self._barbers[barber_id]
            updated = replace(barber, availability=copy.deepcopy(availability))
            self._barbers[barber_id] = updated
            return updated

    def update_barber(self, barber_id: str, name: str, description: str | None) -> Barber:
        with self._lock:
            updated = replace(self._barbers[barber_id], name=name, description=description)
            self._barbers[barber_id] = updated
            return updated

    def delete_barber(self, barber_id: str) -> None:
        with self._lock:
            if any(b.barber_id == barber_id for b in self._bookings.values()):
                raise ConstraintViolation("booking_barber_fk")
            del self._barbers[barber_id]

    def get_service(self, service_id: str) -> Service | None:
        return self._services.get(service_id)

    def create_service(
        self,
        barbershop_id: str,
        name: str,
        duration_minutes: int,
        price: float = 0.0,
        description: str | None = None,
    ) -> Service:
        service = Service(
            id=_new_id(),
            barbershop_id=barbershop_id,
            name=name,
            duration_minutes=duration_minutes,
            price=price,
            description=description,
        )
        with self._lock:
            self._services[service.id] = service
        return service

    def update_service(
        self,
        service_id: str,
        name: str,
        duration_minutes: int,
        price: float,
        description: str | None,
    ) -> Service:
        with self._lock:
            updated = replace(
                self._services[service_id],
                name=name,
                duration_minutes=duration_minutes,
                price=price,
                description=description,
            )
            self._services[service_id] = updated
            return updated

    def delete_service(self, service_id: str) -> None:
        with self._lock:
            if any(b.service_id == service_id for b in self._bookings.values()):
                raise ConstraintViolation("booking_service_fk")
            del self._services[service_id]

    def get_customer(self, customer_id: str) -> Customer | None:
        return self._customers.get(customer_id)

    def find_customer_by_phone(self, barbershop_id: str, phone: str) -> Customer | None:
        for customer in list(self._customers.values()):
            if customer.barbershop_id == barbershop_id and customer.phone == phone:
                return customer
        return None

    def create_customer(self, barbershop_id: str, name: str, phone: str) -> Customer:
        with self._lock:
            if self.find_customer_by_phone(barbershop_id, phone) is not None:
                raise ConstraintViolation("customer_phone_unique")
            customer = Customer(id=_new_id(), barbershop_id=barbershop_id, name=name, phone=phone)
            self._customers[customer.id] = customer
            return customer

    def get_booking(self, booking_id: str) -> Booking | None:
        return self._bookings.get(booking_id)

    def list_active_bookings(
        self,
        barber_id: str,
        start_inclusive: datetime,
        end_inclusive: datetime,
    ) -> list[Booking]:
        found = [
            b
            for b in list(self._bookings.values())
            if b.barber_id == barber_id and b.is_active and start_inclusive <= b.start <= end_inclusive
        ]
        return sorted(found, key=lambda b: b.start)

    def find_active_booking_at(self, barber_id: str, start: datetime) -> Booking | None:
        for booking in list(self._bookings.values()):
            if booking.barber_id == barber_id and booking.is_active and booking.start == start:
                return booking
        return None

    def create_booking(
        self,
        barbershop_id: str,
        barber_id: str,
        service_id: str,
        customer_id: str,
        start: datetime,
        duration_minutes: int,
        status: BookingStatus = BookingStatus.CONFIRMED,
    ) -> Booking:
        booking = Booking(
            id=_new_id(),
            barbershop_id=barbershop_id,
            barber_id=barber_id,
            service_id=service_id,
            customer_id=customer_id,
            start=start,
            duration_minutes=duration_minutes,
            status=status,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            if booking.is_active and self.find_active_booking_at(barber_id, start) is not None:
                raise ConstraintViolation("booking_barber_start_unique")
            self._bookings[booking.id] = booking
        return booking

    def update_booking_status(self, booking_id: str, status: BookingStatus) -> Booking:
        with self._lock:
            booking = self._bookings[booking_id]
            updated = replace(booking, status=status)
            if updated.is_active and not booking.is_active:
                clash = self.find_active_booking_at(booking.barber_id, booking.start)
                if clash is not None:
                    raise ConstraintViolation("booking_barber_start_unique")
            self._bookings[booking_id] = updated
            return updated


def _new_id() -> str:
    return uuid.uuid4().hex
