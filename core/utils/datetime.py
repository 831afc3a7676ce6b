"""Datetime utilities for common operations."""

from datetime import datetime, timedelta, timezone
from typing import Optional


def now() -> datetime:
    """Get current datetime in UTC."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to naive datetimes.

    Some drivers (SQLite) hand timestamps back without tzinfo even when the
    column is declared timezone-aware; they are always stored as UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def strictly_after(previous: Optional[datetime]) -> datetime:
    """
    Current UTC time, bumped past ``previous`` when the clock has not moved.

    Args:
        previous: Last recorded timestamp, if any

    Returns:
        A timestamp strictly greater than ``previous``
    """
    current = now()
    previous = ensure_utc(previous)
    if previous is not None and current <= previous:
        return previous + timedelta(microseconds=1)
    return current
