#!/usr/bin/env python3
"""
Date Helpers

Parsing of bank-local timestamps into timezone-aware datetimes, and the fixed
date formats used by the OFX exporter.
"""

from datetime import datetime, timedelta, timezone

OFX_DATE_FORMAT = "%Y%m%d"
OFX_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def fixed_offset(hours: float) -> timezone:
    """Return a fixed UTC offset timezone."""
    return timezone(timedelta(hours=hours))


def parse_local_datetime(text: str, pattern: str, tz: timezone) -> datetime:
    """
    Parse a naive timestamp and attach a fixed UTC offset.

    Args:
        text: Timestamp text as exported by the bank
        pattern: strptime pattern
        tz: Offset of the bank's local time

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the text does not match the pattern
    """
    return datetime.strptime(text.strip(), pattern).replace(tzinfo=tz)


def attach_offset(value: datetime, tz: timezone) -> datetime:
    """Attach an offset to a naive datetime (e.g. a spreadsheet date cell)."""
    if value.tzinfo is not None:
        return value
    return value.replace(tzinfo=tz)


def to_ofx_date(value: datetime) -> str:
    """Format as YYYYMMDD."""
    return value.strftime(OFX_DATE_FORMAT)


def to_ofx_timestamp(value: datetime) -> str:
    """Format as YYYYMMDDHHMMSS (full second precision)."""
    return value.strftime(OFX_TIMESTAMP_FORMAT)
