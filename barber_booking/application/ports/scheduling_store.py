from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from barber_booking.domain.entities.barbershop import Barber, Barbershop, Customer, Service
from barber_booking.domain.entities.booking import Booking, BookingStatus


class SchedulingStorePort(ABC):
    """Persistence collaborator for barbers, services, customers and bookings.

    Adapters raise PersistenceUnavailableError when the backing store fails and
    ConstraintViolation when a write would break one of the uniqueness rules:
    - at most one active booking per (barber_id, start)
    - at most one customer per (barbershop_id, phone)
    """

    @abstractmethod
    def get_barbershop(self, barbershop_id: str) -> Barbershop | None:
        raise NotImplementedError

    @abstractmethod
    def create_barbershop(self, slug: str, name: str) -> Barbershop:
        raise NotImplementedError

    @abstractmethod
    def update_barbershop(
        self, barbershop_id: str, name: str, address: str | None, phone: str | None
    ) -> Barbershop:
        raise NotImplementedError

    @abstractmethod
    def get_barber(self, barber_id: str) -> Barber | None:
        raise NotImplementedError

    @abstractmethod
    def get_barber_availability(self, barber_id: str) -> dict[str, Any] | None:
        """Weekly availability of the barber, or None when unconfigured or unknown."""
        raise NotImplementedError

    @abstractmethod
    def create_barber(
        self,
        barbershop_id: str,
        name: str,
        description: str | None,
        availability: dict[str, Any] | None,
    ) -> Barber:
        raise NotImplementedError

    @abstractmethod
    def update_barber_availability(self, barber_id: str, availability: dict[str, Any]) -> Barber:
        """Replace the whole weekly availability. No per-day merge."""
        raise NotImplementedError

    @abstractmethod
    def update_barber(self, barber_id: str, name: str, description: str | None) -> Barber:
        raise NotImplementedError

    @abstractmethod
    def delete_barber(self, barber_id: str) -> None:
        """Raises ConstraintViolation while any booking (of any status) references the barber."""
        raise NotImplementedError

    @abstractmethod
    def get_service(self, service_id: str) -> Service | None:
        raise NotImplementedError

    @abstractmethod
    def create_service(
        self,
        barbershop_id: str,
        name: str,
        duration_minutes: int,
        price: float = 0.0,
        description: str | None = None,
    ) -> Service:
        raise NotImplementedError

    @abstractmethod
    def update_service(
        self,
        service_id: str,
        name: str,
        duration_minutes: int,
        price: float,
        description: str | None,
    ) -> Service:
        raise NotImplementedError

    @abstractmethod
    def delete_service(self, service_id: str) -> None:
        """Raises ConstraintViolation while any booking (of any status) references the service."""
        raise NotImplementedError

    @abstractmethod
    def get_customer(self, customer_id: str) -> Customer | None:
        raise NotImplementedError

    @abstractmethod
    def find_customer_by_phone(self, barbershop_id: str, phone: str) -> Customer | None:
        raise NotImplementedError

    @abstractmethod
    def create_customer(self, barbershop_id: str, name: str, phone: str) -> Customer:
        raise NotImplementedError

    @abstractmethod
    def get_booking(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def list_active_bookings(
        self,
        barber_id: str,
        start_inclusive: datetime,
        end_inclusive: datetime,
    ) -> list[Booking]:
        """Bookings of the barber starting within the range, status PENDING or CONFIRMED."""
        raise NotImplementedError

    @abstractmethod
    def find_active_booking_at(self, barber_id: str, start: datetime) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
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
        raise NotImplementedError

    @abstractmethod
    def update_booking_status(self, booking_id: str, status: BookingStatus) -> Booking:
        raise NotImplementedError
