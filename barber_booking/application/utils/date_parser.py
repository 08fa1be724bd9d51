from __future__ import annotations

import re
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

_HHMM_PATTERN = re.compile(r"(\d{1,2}):(\d{2})")
_NON_DIGITS = re.compile(r"\D")


def parse_hhmm(value: object) -> time | None:
    """Parse a 24-hour "HH:MM" literal. Returns None for anything that is not one."""
    if not isinstance(value, str):
        return None
    match = _HHMM_PATTERN.fullmatch(value.strip())
    if not match:
        return None
    hour = int(match.group(1))
    minute = int(match.group(2))
    if 0 <= hour <= 23 and 0 <= minute <= 59:
        return time(hour, minute)
    return None


def parse_calendar_date(value: date | str) -> date | None:
    """Accept a date object or an ISO "YYYY-MM-DD" string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def at_time(target_date: date, clock_time: time, timezone: ZoneInfo) -> datetime:
    return datetime.combine(target_date, clock_time, tzinfo=timezone)


def day_bounds(target_date: date, timezone: ZoneInfo) -> tuple[datetime, datetime]:
    """Start and end of the calendar day in the operating timezone, both inclusive."""
    return (
        datetime.combine(target_date, time.min, tzinfo=timezone),
        datetime.combine(target_date, time.max, tzinfo=timezone),
    )


def format_hhmm(moment: datetime | time) -> str:
    return moment.strftime("%H:%M")


def normalize_phone(phone: str | None) -> str:
    """Keep only the digits of a phone number."""
    return _NON_DIGITS.sub("", phone or "")
