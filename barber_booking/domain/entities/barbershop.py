from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Barbershop:
    id: str
    slug: str
    name: str
    address: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class Barber:
    id: str
    barbershop_id: str
    name: str
    description: str | None = None
    # Raw weekly configuration as stored; None means never configured
    availability: dict[str, Any] | None = None


@dataclass(frozen=True)
class Service:
    id: str
    barbershop_id: str
    name: str
    duration_minutes: int
    price: float = 0.0
    description: str | None = None


@dataclass(frozen=True)
class Customer:
    id: str
    barbershop_id: str
    name: str
    phone: str  # digits only
