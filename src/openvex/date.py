"""Timestamps handling for VEX documents.

All timestamps handled by this package are offset-aware. Naive datetime
objects are assumed to be expressed in UTC.
"""

from __future__ import annotations

import calendar
from datetime import datetime, timezone
from typing import overload

from dateutil.parser import isoparse


def now() -> datetime:
    """Return the current time, in UTC."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Return *value* as an offset-aware datetime.

    :param value: a datetime, naive ones are considered as UTC
    :return: an offset-aware datetime denoting the same instant
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def epoch_seconds(value: datetime) -> int:
    """Return the number of seconds since epoch for *value*.

    Fractional seconds are dropped, so that two timestamps in the same second
    always give the same result whatever their precision.

    :param value: a datetime, naive ones are considered as UTC
    """
    return calendar.timegm(as_utc(value).utctimetuple())


@overload
def timestamp_as_string(value: None) -> None: ...


@overload
def timestamp_as_string(value: datetime) -> str: ...


def timestamp_as_string(value: datetime | None) -> str | None:
    """Convert a datetime into an ISO-8601 offset date-time string.

    UTC is written as ``Z`` and fractional seconds are written without
    trailing zeros, e.g. ``2023-01-17T01:07:16.85347Z``.

    :param value: a datetime or None
    :return: the string representing the timestamp or None if value is None
    """
    if value is None:
        return None
    value = as_utc(value)
    result = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        result += f".{value.microsecond:06d}".rstrip("0")
    offset = value.strftime("%z")
    if offset in ("+0000", "-0000"):
        return result + "Z"
    return f"{result}{offset[:3]}:{offset[3:]}"


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO-8601 date-time string.

    Digits beyond the microsecond are ignored. YAML loaders already convert
    unquoted timestamps, so datetime objects are accepted as is.

    :param value: the string to parse
    :return: an offset-aware datetime
    :raise ValueError: if *value* is not a valid ISO-8601 date-time
    """
    if isinstance(value, datetime):
        return as_utc(value)
    if not isinstance(value, str):
        raise ValueError(f"invalid timestamp {value!r}")
    return as_utc(isoparse(value))
