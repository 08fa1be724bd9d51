from fastapi import APIRouter, Depends, Query

from barber_booking.api.v1.errors import raise_for_error
from barber_booking.api.v1.schemas import (
    AvailableTimesResponseSchema,
    BookingRequestSchema,
    BookingResponseSchema,
    CustomerLookupResponseSchema,
)
from barber_booking.application.use_cases.confirm_booking import ConfirmBookingUseCase
from barber_booking.application.use_cases.get_available_times import GetAvailableTimesUseCase
from barber_booking.application.use_cases.lookup_customer import LookupCustomerUseCase
from barber_booking.wiring.dependencies import (
    get_available_times_use_case,
    get_confirm_booking_use_case,
    get_lookup_customer_use_case,
)

router = APIRouter()


@router.get("/barbers/{barber_id}/available-times", response_model=AvailableTimesResponseSchema)
def available_times(
    barber_id: str,
    date: str = Query(..., description="YYYY-MM-DD"),
    service_duration: int = Query(..., description="Service duration in minutes"),
    uc: GetAvailableTimesUseCase = Depends(get_available_times_use_case),
):
    outcome = uc.execute(barber_id=barber_id, target_date=date, service_duration_minutes=service_duration)
    raise_for_error(outcome.error)
    return AvailableTimesResponseSchema(barber_id=barber_id, date=date, times=outcome.times or [])


@router.post("/bookings", response_model=BookingResponseSchema, status_code=201)
def confirm_booking(
    req: BookingRequestSchema,
    uc: ConfirmBookingUseCase = Depends(get_confirm_booking_use_case),
):
    outcome = uc.execute(
        barber_id=req.barber_id,
        service_id=req.service_id,
        customer_name=req.customer_name,
        customer_phone=req.customer_phone,
        target_date=req.date,
        time=req.time,
    )
    raise_for_error(outcome.error)
    return BookingResponseSchema(booking_id=outcome.booking_id)


@router.get("/customers/lookup", response_model=CustomerLookupResponseSchema)
def lookup_customer(
    barbershop_id: str = Query(...),
    phone: str = Query(...),
    uc: LookupCustomerUseCase = Depends(get_lookup_customer_use_case),
):
    outcome = uc.execute(barbershop_id=barbershop_id, phone=phone)
    raise_for_error(outcome.error)
    return CustomerLookupResponseSchema(name=outcome.name)
