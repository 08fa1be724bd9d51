from pydantic import BaseModel, Field
from typing import Any


class AvailableTimesResponseSchema(BaseModel):
    barber_id: str
    date: str
    times: list[str]


class BookingRequestSchema(BaseModel):
    barber_id: str
    service_id: str
    customer_name: str
    customer_phone: str
    date: str = Field(description="YYYY-MM-DD in the business timezone")
    time: str = Field(description="HH:MM")


class BookingResponseSchema(BaseModel):
    booking_id: str


class AdminBookingRequestSchema(BaseModel):
    barber_id: str
    service_id: str
    date: str
    time: str
    customer_id: str | None = None
    new_customer_name: str | None = None
    new_customer_phone: str | None = None


class StatusUpdateRequestSchema(BaseModel):
    # Plain string so that unknown values get the INVALID_STATUS error body
    status: str


class CreateBarberRequestSchema(BaseModel):
    name: str
    description: str | None = None


class AvailabilityRequestSchema(BaseModel):
    availability: dict[str, Any]


class DayWindowSchema(BaseModel):
    enabled: bool
    start: str = "09:00"
    end: str = "18:00"
    lunch_start: str = "12:00"
    lunch_end: str = "13:00"


class WeeklyWindowsRequestSchema(BaseModel):
    windows: dict[str, DayWindowSchema]
    interval_minutes: int | None = None


class WeeklyWindowsResponseSchema(BaseModel):
    windows: dict[str, DayWindowSchema]


class EntityResponseSchema(BaseModel):
    id: str


class CustomerLookupResponseSchema(BaseModel):
    name: str | None = None


class ServiceRequestSchema(BaseModel):
    name: str
    duration_minutes: int
    price: float = 0.0
    description: str | None = None


class CreateBarbershopRequestSchema(BaseModel):
    name: str
    slug: str


class UpdateBarbershopRequestSchema(BaseModel):
    name: str
    address: str | None = None
    phone: str | None = None
