from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class OperationError:
    kind: ErrorKind
    code: str
    message: str
    field: str | None = None

    @classmethod
    def validation(cls, code: str, message: str, field: str | None = None) -> "OperationError":
        return cls(kind=ErrorKind.VALIDATION, code=code, message=message, field=field)

    @classmethod
    def not_found(cls, code: str, message: str) -> "OperationError":
        return cls(kind=ErrorKind.NOT_FOUND, code=code, message=message)

    @classmethod
    def conflict(cls, code: str, message: str) -> "OperationError":
        return cls(kind=ErrorKind.CONFLICT, code=code, message=message)

    @classmethod
    def unavailable(cls) -> "OperationError":
        return cls(
            kind=ErrorKind.UNAVAILABLE,
            code="SERVICE_UNAVAILABLE",
            message="Something went wrong on our side. Please try again in a moment.",
        )


SLOT_NO_LONGER_AVAILABLE = "SLOT_NO_LONGER_AVAILABLE"
SLOT_ALREADY_BOOKED = "SLOT_ALREADY_BOOKED"


def slot_no_longer_available() -> OperationError:
    return OperationError.conflict(
        SLOT_NO_LONGER_AVAILABLE,
        "This time is no longer available. Please pick another time.",
    )


def slot_already_booked() -> OperationError:
    return OperationError.conflict(
        SLOT_ALREADY_BOOKED,
        "This time has already been booked. Please pick another time.",
    )


@dataclass(frozen=True)
class AvailabilityOutcome:
    times: list[str] | None = None
    error: OperationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BookingOutcome:
    booking_id: str | None = None
    error: OperationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class OperationOutcome:
    """Outcome for admin operations that return an entity id (or nothing)."""

    entity_id: str | None = None
    error: OperationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
