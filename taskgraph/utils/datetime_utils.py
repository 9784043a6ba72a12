"""Date and time utilities."""

from datetime import datetime, timedelta
from typing import Optional, Union

SECONDS_PER_DAY = 24 * 3600


def add_days(value: datetime, days: float) -> datetime:
    """Shift a datetime by a (possibly fractional or negative) number of days."""
    return value + timedelta(days=days)


def days_between(start: datetime, end: datetime) -> float:
    """Signed number of days from start to end."""
    return (end - start).total_seconds() / SECONDS_PER_DAY


def start_of_day(value: datetime) -> datetime:
    """Midnight of the given day."""
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def parse_datetime(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an ISO-8601 string; datetimes and None pass through."""
    if value is None or isinstance(value, datetime):
        return value

    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid date: {value!r}")
