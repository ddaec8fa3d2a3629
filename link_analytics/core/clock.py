"""Timezone helpers shared by the redirect and analytics paths."""

from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Return ``value`` as an aware UTC datetime.

    SQLite hands back naive datetimes even for ``DateTime(timezone=True)``
    columns; those values were written in UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def local_date(value: datetime, tz_name: str = "UTC") -> date:
    """Calendar date of ``value`` in the IANA zone ``tz_name``."""
    return as_utc(value).astimezone(ZoneInfo(tz_name)).date()
