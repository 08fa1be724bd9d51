import logging

from fastapi import FastAPI

from barber_booking.api.v1.admin import barbershops_router
from barber_booking.api.v1.admin import router as admin_router
from barber_booking.api.v1.bookings import router as bookings_router
from barber_booking.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("barber_id", "booking_id", "date", "time", "code", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title=settings.APP_NAME, version="1.0.0")

app.include_router(bookings_router, prefix="/api/v1", tags=["bookings"])
app.include_router(barbershops_router, prefix="/api/v1", tags=["admin"])
app.include_router(admin_router, prefix="/api/v1", tags=["admin"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
