"""
DateTime utilities

Every datetime stored or compared by the service is UTC-aware. SQLite hands
back naive values, so anything read from the database goes through ensure_utc
before it is compared.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """
    Current time with the UTC tzinfo attached.

    Example:
        >>> utc_now().tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Attach or convert to UTC. Naive datetimes are taken to be UTC already.

    Example:
        >>> ensure_utc(datetime(2025, 1, 1, 12, 0)).tzinfo == timezone.utc
        True
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    elif dt.tzinfo != timezone.utc:
        logger.debug(f"Converting {dt.tzinfo} to UTC: {dt}")
        return dt.astimezone(timezone.utc)
    return dt


def utc_day_bounds(day: Optional[date] = None) -> Tuple[datetime, datetime]:
    """
    [start, end) of a calendar day in UTC; today when no day is given.
    """
    day = day or utc_now().date()
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


def format_display_date(dt: datetime) -> str:
    """
    Day-first date used in activity descriptions, e.g. 15.06.2023.
    """
    return ensure_utc(dt).strftime("%d.%m.%Y")


__all__ = [
    'utc_now',
    'ensure_utc',
    'utc_day_bounds',
    'format_display_date',
]
