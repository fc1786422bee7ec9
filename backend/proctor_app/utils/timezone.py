"""
Time helpers.

Timestamps are stored as naive UTC; conversion to the configured display
timezone happens only when rendering reports.
"""
from datetime import datetime
from typing import Optional

import pytz

from ..core.config import settings


def utc_now() -> datetime:
    """Current time as naive UTC, the format every stored timestamp uses."""
    return datetime.now(pytz.UTC).replace(tzinfo=None)


def get_display_tz():
    return pytz.timezone(settings.default_timezone)


def utc_to_local(utc_dt: datetime) -> datetime:
    if utc_dt.tzinfo is None:
        utc_dt = utc_dt.replace(tzinfo=pytz.UTC)
    return utc_dt.astimezone(get_display_tz())


def format_local_time(dt: Optional[datetime], format_str: Optional[str] = None) -> Optional[str]:
    if dt is None:
        return None
    return utc_to_local(dt).strftime(format_str or settings.timezone_display_format)


def minutes_between(start: datetime, end: Optional[datetime]) -> Optional[float]:
    if end is None:
        return None
    return (end - start).total_seconds() / 60


def to_utc_iso(dt: datetime) -> str:
    """ISO 8601 with an explicit UTC offset for a stored naive-UTC timestamp."""
    if dt.tzinfo is None:
        dt = pytz.UTC.localize(dt)
    return dt.isoformat()
