"""Timestamp helpers shared by the ledger and the message log.

Timestamps are handled as aware datetimes in the domain layer and persisted as
naive values expressed in the configured application timezone, so ordering
comparisons done by the database match the ones done in Python.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from isle.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)

#: Smallest step the database can represent; used to keep message timestamps
#: strictly increasing inside a conversation.
TIMESTAMP_RESOLUTION: Final[timedelta] = timedelta(microseconds=1)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone configured through ``APP_TIMEZONE``.

    Accepts IANA names (``Europe/Madrid``) and fixed offsets (``UTC+02:00``).
    Unknown values fall back to UTC.
    """

    name = (get_settings().app_timezone or "").strip() or _DEFAULT_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(name)
        if match is None:
            return timezone.utc
        sign = -1 if match.group("sign") == "-" else 1
        offset = timedelta(
            hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
        )
        return timezone(sign * offset)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Return the current localized time without ``tzinfo`` (storage format)."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach or convert ``value`` to the configured timezone."""

    if value is None:
        return None
    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` in the storage format: app timezone, no ``tzinfo``."""

    localized = ensure_app_timezone(value)
    if localized is None:
        return None
    return localized.replace(tzinfo=None)


def next_timestamp(previous: datetime | None) -> datetime:
    """Return a naive storage timestamp strictly later than ``previous``.

    The clock is used when it is ahead; otherwise ``previous`` is bumped by
    :data:`TIMESTAMP_RESOLUTION`.
    """

    now = now_in_app_naive_datetime()
    if previous is None:
        return now
    floor = ensure_app_naive_datetime(previous) + TIMESTAMP_RESOLUTION
    return max(now, floor)
