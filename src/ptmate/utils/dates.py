"""Date and time helpers shared by the dashboard, repositories and API."""

from datetime import date, datetime, timedelta
from enum import IntEnum


class Weekday(IntEnum):
    """Day of week, numbered like ``datetime.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, value: str) -> "Weekday":
        """Parse a weekday name such as ``"sunday"`` or ``"Mon"``."""
        key = value.strip().upper()
        for day in cls:
            if day.name == key or day.name[:3] == key:
                return day
        raise ValueError(f"Unknown weekday: {value!r}")


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time.

    Naive values are assumed to already be local and are returned as-is.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_datetime(value: str | datetime) -> datetime:
    """Parse an ISO-8601 string (a trailing ``Z`` is accepted)."""
    if isinstance(value, datetime):
        return to_local_naive(value)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_local_naive(datetime.fromisoformat(text))


def start_of_day(moment: datetime) -> datetime:
    """Midnight at the start of ``moment``'s day, keeping its tzinfo."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(moment: datetime, first_weekday: Weekday = Weekday.SUNDAY) -> datetime:
    """Midnight on the first day of the calendar week containing ``moment``."""
    offset = (moment.weekday() - first_weekday) % 7
    return start_of_day(moment) - timedelta(days=offset)


def format_date(value: date | None) -> str:
    """Format a date for tables, ``N/A`` when missing."""
    return value.strftime("%Y-%m-%d") if value else "N/A"
