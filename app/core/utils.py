import secrets
from datetime import datetime, date, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

from app.core.config import settings

def generate_password():
    adjectives = ["Happy", "Sunny", "Clever", "Brave", "Calm", "Eager", "Fancy", "Jolly", "Kind", "Lively"]
    nouns = ["Tiger", "Lion", "Eagle", "Panda", "Bear", "Wolf", "Fox", "Hawk", "Owl", "Deer"]

    adj = secrets.choice(adjectives)
    noun = secrets.choice(nouns)
    number = secrets.randbelow(1000)

    return f"{adj}-{noun}-{number:03d}"

def utcnow() -> datetime:
    # Timestamps are stored as aware UTC
    return datetime.now(timezone.utc)

def clinic_timezone() -> tzinfo:
    if settings.CLINIC_TIMEZONE.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(settings.CLINIC_TIMEZONE)

def clinic_today(tz: tzinfo) -> date:
    return datetime.now(tz).date()

def combine_appointment(day: date, at: time, tz: tzinfo) -> datetime:
    """Join a date and a wall-clock time into a UTC appointment timestamp, minute precision.

    A naive ``at`` is read in the clinic zone ``tz``; an aware one keeps its own offset.
    """
    at = at.replace(second=0, microsecond=0)
    if at.tzinfo is None:
        combined = datetime.combine(day, at, tzinfo=tz)
    else:
        combined = datetime.combine(day, at)
    return combined.astimezone(timezone.utc)

def day_bounds(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """UTC half-open range covering the calendar ``day`` in zone ``tz``."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)

def like_pattern(search: str) -> str:
    """Substring pattern for ``ilike`` with a backslash escape; ``%`` and ``_`` match literally."""
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
