from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, TypeVar

from barber_booking.application.exceptions import PersistenceUnavailableError
from barber_booking.domain.entities.barbershop import Barber, Barbershop, Customer, Service
from barber_booking.domain.entities.booking import Booking, BookingStatus
from barber_booking.infrastructure.store.memory_store import MemorySchedulingStore

T = TypeVar("T")


class JsonSchedulingStore(MemorySchedulingStore):
    """
    MemorySchedulingStore persisted to a single JSON document.

    The file is read once at startup and rewritten after every write, so it is
    meant for one process (local development), not for sharing between workers.
    A write whose file save fails is rolled back in memory as well.
    """

    def __init__(self, path: str = "./data/store.json") -> None:
        super().__init__()
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)
        self._load()

    def create_barbershop(self, slug: str, name: str) -> Barbershop:
        return self._commit(lambda: super(JsonSchedulingStore, self).create_barbershop(slug, name))

    def update_barbershop(
        self, barbershop_id: str, name: str, address: str | None, phone: str | None
    ) -> Barbershop:
        return self._commit(
            lambda: super(JsonSchedulingStore, self).update_barbershop(barbershop_id, name, address, phone)
        )

    def create_barber(
        self,
        barbershop_id: str,
        name: str,
        description: str | None,
        availability: dict[str, Any] | None,
    ) -> Barber:
        return self._commit(
            lambda: super(JsonSchedulingStore, self).create_barber(barbershop_id, name, description, availability)
        )

    def update_barber_availability(self, barber_id: str, availability: dict[str, Any]) -> Barber:
        return self._commit(
            lambda: super(JsonSchedulingStore, self).update_barber_availability(barber_id, availability)
        )

    def update_barber(self, barber_id: str, name: str, description: str | None) -> Barber:
        return self._commit(lambda: super(JsonSchedulingStore, self).update_barber(barber_id, name, description))

    def delete_barber(self, barber_id: str) -> None:
        self._commit(lambda: super(JsonSchedulingStore, self).delete_barber(barber_id))

    def create_service(
        self,
        barbershop_id: str,
        name: str,
        duration_minutes: int,
        price: float = 0.0,
        description: str | None = None,
    ) -> Service:
        return self._commit(
            lambda: super(JsonSchedulingStore, self).create_service(
                barbershop_id, name, duration_minutes, price, description
            )
        )

    def update_service(
        self,
        service_id: str,
        name: str,
        duration_minutes: int,
        price: float,
        description: str | None,
    ) -> Service:
        return self._commit(
            lambda: super(JsonSchedulingStore, self).update_service(
                service_id, name, duration_minutes, price, description
            )
        )

    def delete_service(self, service_id: str) -> None:
        self._commit(lambda: super(JsonSchedulingStore, self).delete_service(service_id))

    def create_customer(self, barbershop_id: str, name: str, phone: str) -> Customer:
        return self._commit(lambda: super(JsonSchedulingStore, self).create_customer(barbershop_id, name, phone))

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
        return self._commit(
            lambda: super(JsonSchedulingStore, self).create_booking(
                barbershop_id, barber_id, service_id, customer_id, start, duration_minutes, status
            )
        )

    def update_booking_status(self, booking_id: str, status: BookingStatus) -> Booking:
        return self._commit(lambda: super(JsonSchedulingStore, self).update_booking_status(booking_id, status))

    def _commit(self, write: Callable[[], T]) -> T:
        """Apply one in-memory write and persist it; restore the previous state if persisting fails."""
        with self._file_lock:
            before = self._snapshot()
            result = write()
            try:
                self._save()
            except PersistenceUnavailableError:
                self._restore(before)
                raise
            return result

    def _snapshot(self) -> tuple[dict, ...]:
        # Entities are frozen, so copying the dicts is enough
        with self._lock:
            return (
                dict(self._barbershops),
                dict(self._barbers),
                dict(self._services),
                dict(self._customers),
                dict(self._bookings),
            )

    def _restore(self, snapshot: tuple[dict, ...]) -> None:
        with self._lock:
            self._barbershops, self._barbers, self._services, self._customers, self._bookings = snapshot

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._barbershops = {d["id"]: Barbershop(**d) for d in data.get("barbershops", [])}
            self._barbers = {d["id"]: Barber(**d) for d in data.get("barbers", [])}
            self._services = {d["id"]: Service(**d) for d in data.get("services", [])}
            self._customers = {d["id"]: Customer(**d) for d in data.get("customers", [])}
            self._bookings = {d["id"]: _deserialize_booking(d) for d in data.get("bookings", [])}
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            # Refuse to start from an empty store: it would silently forget existing bookings
            raise PersistenceUnavailableError(f"Cannot read store file {self._path}: {e}") from e

    def _save(self) -> None:
        """Write the current state atomically (temp file + rename). Callers hold the file lock."""
        temp_path = self._path.with_suffix(".json.tmp")
        with self._lock:
            data = {
                "barbershops": [asdict(s) for s in self._barbershops.values()],
                "barbers": [asdict(b) for b in self._barbers.values()],
                "services": [asdict(s) for s in self._services.values()],
                "customers": [asdict(c) for c in self._customers.values()],
                "bookings": [_serialize_booking(b) for b in self._bookings.values()],
                "version": 1,
            }
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            self._logger.error("Failed to write store file", extra={"reason": str(e)})
            raise PersistenceUnavailableError(f"Cannot write store file {self._path}: {e}") from e


def _serialize_booking(booking: Booking) -> dict[str, Any]:
    data = asdict(booking)
    data["start"] = booking.start.isoformat()
    data["status"] = booking.status.value
    data["created_at"] = booking.created_at.isoformat() if booking.created_at else None
    return data


def _deserialize_booking(data: dict[str, Any]) -> Booking:
    created_at = data.get("created_at")
    return Booking(
        id=data["id"],
        barbershop_id=data["barbershop_id"],
        barber_id=data["barber_id"],
        service_id=data["service_id"],
        customer_id=data["customer_id"],
        start=datetime.fromisoformat(data["start"]),
        duration_minutes=int(data["duration_minutes"]),
        status=BookingStatus(data["status"]),
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )
