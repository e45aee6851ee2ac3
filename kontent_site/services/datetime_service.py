"""CMS date_time element values as aware UTC datetimes."""

from __future__ import annotations

from datetime import datetime, timezone

import pendulum


def parse_cms_datetime(value: str, source_tz: str = "UTC") -> datetime:
    """Parse a date_time element value and normalize it to UTC.

    The Delivery API emits ISO 8601 in UTC (``2024-06-01T09:30:00Z``); editors
    importing content sometimes leave date-only or zone-less values, which are
    read in ``source_tz``. Raises ValueError for anything pendulum cannot read.
    """
    parsed = pendulum.parse(value.strip(), tz=source_tz, strict=False)
    if isinstance(parsed, pendulum.DateTime):
        return parsed.in_timezone("UTC")
    if isinstance(parsed, pendulum.Date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz=source_tz).in_timezone(
            "UTC"
        )
    msg = f"Not a date or datetime: {value!r}"
    raise ValueError(msg)


def format_iso(dt: datetime) -> str:
    """ISO 8601 for JSON responses; naive values are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()
