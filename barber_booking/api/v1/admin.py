from dataclasses import asdict

from fastapi import APIRouter, Depends

from barber_booking.api.v1.errors import raise_for_error
from barber_booking.api.v1.schemas import (
    AdminBookingRequestSchema,
    AvailabilityRequestSchema,
    BookingResponseSchema,
    CreateBarberRequestSchema,
    CreateBarbershopRequestSchema,
    DayWindowSchema,
    EntityResponseSchema,
    ServiceRequestSchema,
    StatusUpdateRequestSchema,
    UpdateBarbershopRequestSchema,
    WeeklyWindowsRequestSchema,
    WeeklyWindowsResponseSchema,
)
from barber_booking.application.use_cases.create_admin_booking import CreateAdminBookingUseCase
from barber_booking.application.use_cases.manage_barbers import ManageBarbersUseCase
from barber_booking.application.use_cases.manage_barbershop import ManageBarbershopUseCase
from barber_booking.application.use_cases.manage_services import ManageServicesUseCase
from barber_booking.application.use_cases.update_booking_status import UpdateBookingStatusUseCase
from barber_booking.application.utils.weekly_schedule import DayWindow
from barber_booking.wiring.dependencies import (
    get_admin_booking_use_case,
    get_manage_barbers_use_case,
    get_manage_barbershop_use_case,
    get_manage_services_use_case,
    get_update_booking_status_use_case,
)

barbershops_router = APIRouter(prefix="/admin/barbershops")
router = APIRouter(prefix="/admin/{barbershop_id}")


@barbershops_router.post("", response_model=EntityResponseSchema, status_code=201)
def create_barbershop(
    req: CreateBarbershopRequestSchema,
    uc: ManageBarbershopUseCase = Depends(get_manage_barbershop_use_case),
):
    outcome = uc.create_barbershop(name=req.name, slug=req.slug)
    raise_for_error(outcome.error)
    return EntityResponseSchema(id=outcome.entity_id)


@router.put("", response_model=EntityResponseSchema)
def update_barbershop(
    barbershop_id: str,
    req: UpdateBarbershopRequestSchema,
    uc: ManageBarbershopUseCase = Depends(get_manage_barbershop_use_case),
):
    outcome = uc.update_barbershop(
        barbershop_id=barbershop_id, name=req.name, address=req.address, phone=req.phone
    )
    raise_for_error(outcome.error)
    return EntityResponseSchema(id=outcome.entity_id)


@router.post("/barbers", response_model=EntityResponseSchema, status_code=201)
def create_barber(
    barbershop_id: str,
    req: CreateBarberRequestSchema,
    uc: ManageBarbersUseCase = Depends(get_manage_barbers_use_case),
):
    outcome = uc.create_barber(barbershop_id=barbershop_id, name=req.name, description=req.description)
    raise_for_error(outcome.error)
    return EntityResponseSchema(id=outcome.entity_id)


@router.put("/barbers/{barber_id}", response_model=EntityResponseSchema)
def update_barber(
    barbershop_id: str,
    barber_id: str,
    req: CreateBarberRequestSchema,
    uc: ManageBarbersUseCase = Depends(get_manage_barbers_use_case),
):
    outcome = uc.update_barber(
        barbershop_id=barbershop_id, barber_id=barber_id, name=req.name, description=req.description
    )
    raise_for_error(outcome.error)
    return EntityResponseSchema(id=outcome.entity_id)


@router.delete("/barbers/{barber_id}", response_model=EntityResponseSchema)
def delete_barber(
    barbershop_id: str,
    barber_id: str,
    uc: ManageBarbersUseCase = Depends(get_manage_barbers_use_case),
):
    outcome = uc.delete_barber(barbershop_id=barbershop_id, barber_id=barber_id)
    raise_for_error(outcome.error)
    return EntityResponseSchema(id=outcome.entity_id)


@router.post("/services", response_model=EntityResponseSchema, status_code=201)
def create_service(
    barbershop_id: str,
    req: ServiceRequestSchema,
    uc: ManageServicesUseCase = Depends(get_manage_services_use_case),
):
    outcome = uc.upsert_service(barbershop_id=barbershop_id, **req.model_dump())
    raise_for_error(outcome.error)
    return EntityResponseSchema(id=outcome.entity_id)


@router.put("/services/{service_id}", response_model=EntityResponseSchema)
def update_service(
    barbershop_id: str,
    service_id: str,
    req: ServiceRequestSchema,
    uc: ManageServicesUseCase = Depends(get_manage_services_use_case),
):
    outcome = uc.upsert_service(barbershop_id=barbershop_id, service_id=service_id, **req.model_dump())
    raise_for_error(outcome.error)
    return EntityResponseSchema(id=outcome.entity_id)


@router.delete("/services/{service_id}", response_model=EntityResponseSchema)
def delete_service(
    barbershop_id: str,
    service_id: str,
    uc: ManageServicesUseCase = Depends(get_manage_services_use_case),
):
    outcome = uc.delete_service(barbershop_id=barbershop_id, service_id=service_id)
    raise_for_error(outcome.error)
    return EntityResponseSchema(id=outcome.entity_id)


@router.put("/barbers/{barber_id}/availability", response_model=EntityResponseSchema)
def replace_availability(
    barbershop_id: str,
    barber_id: str,
    req: AvailabilityRequestSchema,
    uc: ManageBarbersUseCase = Depends(get_manage_barbers_use_case),
):
    outcome = uc.update_availability(barbershop_id=barbershop_id, barber_id=barber_id, availability=req.availability)
    raise_for_error(outcome.error)
    return EntityResponseSchema(id=outcome.entity_id)


@router.get("/barbers/{barber_id}/availability/weekly", response_model=WeeklyWindowsResponseSchema)
def weekly_windows(
    barbershop_id: str,
    barber_id: str,
    uc: ManageBarbersUseCase = Depends(get_manage_barbers_use_case),
):
    windows, error = uc.editor_windows(barbershop_id=barbershop_id, barber_id=barber_id)
    raise_for_error(error)
    return WeeklyWindowsResponseSchema(
        windows={day: DayWindowSchema(**asdict(window)) for day, window in (windows or {}).items()}
    )


@router.put("/barbers/{barber_id}/availability/weekly", response_model=EntityResponseSchema)
def save_weekly_windows(
    barbershop_id: str,
    barber_id: str,
    req: WeeklyWindowsRequestSchema,
    uc: ManageBarbersUseCase = Depends(get_manage_barbers_use_case),
):
    outcome = uc.update_weekly_windows(
        barbershop_id=barbershop_id,
        barber_id=barber_id,
        windows={day: DayWindow(**window.model_dump()) for day, window in req.windows.items()},
        interval_minutes=req.interval_minutes,
    )
    raise_for_error(outcome.error)
    return EntityResponseSchema(id=outcome.entity_id)


@router.post("/bookings", response_model=BookingResponseSchema, status_code=201)
def create_booking(
    barbershop_id: str,
    req: AdminBookingRequestSchema,
    uc: CreateAdminBookingUseCase = Depends(get_admin_booking_use_case),
):
    outcome = uc.execute(
        barbershop_id=barbershop_id,
        barber_id=req.barber_id,
        service_id=req.service_id,
        target_date=req.date,
        time=req.time,
        customer_id=req.customer_id,
        new_customer_name=req.new_customer_name,
        new_customer_phone=req.new_customer_phone,
    )
    raise_for_error(outcome.error)
    return BookingResponseSchema(booking_id=outcome.booking_id)


@router.patch("/bookings/{booking_id}/status", response_model=EntityResponseSchema)
def update_booking_status(
    barbershop_id: str,
    booking_id: str,
    req: StatusUpdateRequestSchema,
    uc: UpdateBookingStatusUseCase = Depends(get_update_booking_status_use_case),
):
    outcome = uc.execute(barbershop_id=barbershop_id, booking_id=booking_id, status=req.status)
    raise_for_error(outcome.error)
    return EntityResponseSchema(id=outcome.entity_id)
