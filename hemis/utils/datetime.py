# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for the legacy CUBA wire format.

The old-hemis schema stores naive local timestamps (``timestamp without
time zone``) and the CUBA REST API renders them as
``yyyy-MM-dd HH:mm:ss.SSS``. Every conversion between the database, the
wire and Python goes through this module.

Usage:
------
    from hemis.utils.datetime import format_cuba_datetime, local_now

    row.create_ts = local_now()
    payload["createTs"] = format_cuba_datetime(row.create_ts)
"""

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

CUBA_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
CUBA_TIME_FORMAT = "%H:%M:%S"


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def local_now(zone: str = "Asia/Tashkent") -> datetime:
    """Get the current wall-clock time as a naive datetime.

    Audit columns of the legacy schema hold naive timestamps in the
    server's zone, which is what the CUBA application wrote.

    Args:
        zone: IANA zone name.

    Returns:
        Naive datetime with millisecond precision.
    """
    now = datetime.now(ZoneInfo(zone)).replace(tzinfo=None)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def format_cuba_datetime(value: datetime) -> str:
    """Format a datetime as ``yyyy-MM-dd HH:mm:ss.SSS``.

    Args:
        value: Naive or aware datetime. Aware values keep their wall time.

    Returns:
        CUBA formatted string.

    Example:
        >>> format_cuba_datetime(datetime(2024, 9, 1, 8, 30, 5, 120000))
        '2024-09-01 08:30:05.120'
    """
    millis = value.microsecond // 1000
    return f"{value.strftime(CUBA_DATETIME_FORMAT)}.{millis:03d}"


def parse_cuba_datetime(value: str) -> datetime:
    """Parse a datetime in CUBA (space separated) or ISO (``T``) format.

    Fractional seconds are optional. A trailing ``Z`` or offset is
    accepted and dropped after conversion to naive wall time.

    Args:
        value: The string to parse.

    Returns:
        Naive datetime.

    Raises:
        ValueError: If the string is not a recognised datetime.
    """
    text = value.strip()
    if not text:
        raise ValueError("Empty datetime value")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    if "T" not in text and " " in text:
        text = text.replace(" ", "T", 1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None)
    return parsed


def parse_date(value: str) -> date:
    """Parse an ISO ``yyyy-MM-dd`` date.

    A datetime string is accepted and truncated to its date part.

    Raises:
        ValueError: If the string is not a date.
    """
    text = value.strip()
    if len(text) > 10:
        return parse_cuba_datetime(text).date()
    return date.fromisoformat(text)


def format_time(value: time) -> str:
    """Format a time of day as ``HH:mm:ss``."""
    return value.strftime(CUBA_TIME_FORMAT)


def parse_time(value: str) -> time:
    """Parse ``HH:mm`` or ``HH:mm:ss`` (fractions allowed).

    Raises:
        ValueError: If the string is not a time of day.
    """
    return time.fromisoformat(value.strip())
