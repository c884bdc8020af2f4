"""Datetime normalization helpers.

Trade dates are kept as timezone-aware UTC, the same way the models stamp
``created_at``. SQLite hands them back naive, so readers go through
``to_utc`` before comparing or formatting.
"""

from datetime import date, datetime, time, timezone


def to_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive input is assumed UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max, tzinfo=timezone.utc)
