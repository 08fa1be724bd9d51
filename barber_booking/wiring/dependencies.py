from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from barber_booking.core.config import settings
from barber_booking.infrastructure.cache.mock_page_cache import MockPageCache
from barber_booking.infrastructure.cache.revalidate_client import RevalidatePageCache
from barber_booking.infrastructure.store.json_store import JsonSchedulingStore
from barber_booking.infrastructure.store.memory_store import MemorySchedulingStore
from barber_booking.application.ports.page_cache import PageCachePort
from barber_booking.application.ports.scheduling_store import SchedulingStorePort
from barber_booking.application.use_cases.booking_writer import BookingWriter
from barber_booking.application.use_cases.confirm_booking import ConfirmBookingUseCase
from barber_booking.application.use_cases.create_admin_booking import CreateAdminBookingUseCase
from barber_booking.application.use_cases.get_available_times import GetAvailableTimesUseCase
from barber_booking.application.use_cases.lookup_customer import LookupCustomerUseCase
from barber_booking.application.use_cases.manage_barbers import ManageBarbersUseCase
from barber_booking.application.use_cases.manage_barbershop import ManageBarbershopUseCase
from barber_booking.application.use_cases.manage_services import ManageServicesUseCase
from barber_booking.application.use_cases.update_booking_status import UpdateBookingStatusUseCase


_store: SchedulingStorePort | None = None


def get_store() -> SchedulingStorePort:
    global _store
    if _store is None:
        if settings.STORE_PROVIDER.lower() == "json":
            _store = JsonSchedulingStore(settings.STORE_PATH)
        else:
            _store = MemorySchedulingStore()
    return _store


@lru_cache
def get_timezone() -> ZoneInfo:
    return ZoneInfo(settings.BUSINESS_TIMEZONE)


@lru_cache
def get_page_cache() -> PageCachePort:
    logger = logging.getLogger(__name__)
    if not settings.REVALIDATE_URL:
        if settings.ENV.lower() not in {"dev", "local", "test"}:
            logger.warning("REVALIDATE_URL not set, public pages will not be revalidated")
        return MockPageCache()
    logger.info("Using RevalidatePageCache")
    return RevalidatePageCache(endpoint=settings.REVALIDATE_URL, secret=settings.REVALIDATE_SECRET)


def get_available_times_use_case() -> GetAvailableTimesUseCase:
    return GetAvailableTimesUseCase(store=get_store(), timezone=get_timezone())


def get_booking_writer() -> BookingWriter:
    return BookingWriter(
        store=get_store(),
        page_cache=get_page_cache(),
        available_times=get_available_times_use_case(),
    )


def get_confirm_booking_use_case() -> ConfirmBookingUseCase:
    return ConfirmBookingUseCase(store=get_store(), writer=get_booking_writer(), timezone=get_timezone())


def get_admin_booking_use_case() -> CreateAdminBookingUseCase:
    return CreateAdminBookingUseCase(store=get_store(), writer=get_booking_writer(), timezone=get_timezone())


def get_update_booking_status_use_case() -> UpdateBookingStatusUseCase:
    return UpdateBookingStatusUseCase(store=get_store(), page_cache=get_page_cache(), timezone=get_timezone())


def get_manage_barbers_use_case() -> ManageBarbersUseCase:
    return ManageBarbersUseCase(
        store=get_store(),
        page_cache=get_page_cache(),
        default_availability=settings.DEFAULT_AVAILABILITY,
        schedule_interval_minutes=settings.SCHEDULE_INTERVAL_MINUTES,
    )


def get_lookup_customer_use_case() -> LookupCustomerUseCase:
    return LookupCustomerUseCase(store=get_store())


def get_manage_services_use_case() -> ManageServicesUseCase:
    return ManageServicesUseCase(
        store=get_store(),
        page_cache=get_page_cache(),
        max_duration_minutes=settings.MAX_SERVICE_DURATION_MINUTES,
    )


def get_manage_barbershop_use_case() -> ManageBarbershopUseCase:
    return ManageBarbershopUseCase(store=get_store(), page_cache=get_page_cache())
