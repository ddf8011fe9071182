"""Clinic-local time helpers."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(timezone.utc)


def clinic_now(tz_name: str) -> datetime:
    """Return the clinic's wall-clock time as a naive datetime."""

    return datetime.now(ZoneInfo(tz_name)).replace(tzinfo=None)


def to_clinic_time(value: datetime, tz_name: str) -> datetime:
    """Normalise ``value`` to a naive clinic wall-clock datetime.

    Naive values are assumed to already be clinic-local; aware values are
    converted to the clinic timezone first.
    """

    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)
