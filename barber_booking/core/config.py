from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_weekly_availability() -> dict[str, Any]:
    workday = {"available": True, "start": "09:00", "end": "18:00"}
    day_off = {"available": False, "start": "09:00", "end": "18:00"}
    return {
        "monday": dict(workday),
        "tuesday": dict(workday),
        "wednesday": dict(workday),
        "thursday": dict(workday),
        "friday": dict(workday),
        "saturday": dict(day_off),
        "sunday": dict(day_off),
    }


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Barber Booking"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BUSINESS_TIMEZONE: str = "America/Sao_Paulo"

    STORE_PROVIDER: str = "memory"
    STORE_PATH: str = "./data/store.json"

    # JSON-encoded when set through the environment
    DEFAULT_AVAILABILITY: dict[str, Any] = Field(default_factory=_default_weekly_availability)
    MAX_SERVICE_DURATION_MINUTES: int = 480
    SCHEDULE_INTERVAL_MINUTES: int = 45

    REVALIDATE_URL: str | None = None
    REVALIDATE_SECRET: str | None = None


settings = Settings()
