"""
Time helpers
Stored timestamps are naive UTC datetimes (the Mongo driver default)
"""
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current naive UTC time at the millisecond precision Mongo stores."""
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def start_of_local_day() -> datetime:
    """Local midnight of the current day, expressed as naive UTC."""
    local_midnight = datetime.now().astimezone().replace(hour=0, minute=0, second=0, microsecond=0)
    return local_midnight.astimezone(timezone.utc).replace(tzinfo=None)


def as_utc(value) -> Optional[datetime]:
    """Coerce a stored or submitted timestamp into naive UTC, or None."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
