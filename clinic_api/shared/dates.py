"""Clinic calendar helpers.

Appointment dates are stored as absolute instants (naive UTC) marking the
start of a calendar day in the clinic timezone. Everything that turns user
input into such an instant, or an instant back into ``YYYY-MM-DD``, goes
through this module.
"""

from datetime import date, datetime, time, timezone
from typing import Optional, Union

import pytz

from ..config import CLINIC_TIMEZONE

DateInput = Union[str, date, datetime]


def utc_now() -> datetime:
    """Current time as a naive UTC datetime (the storage convention)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def clinic_tz(name: Optional[str] = None):
    return pytz.timezone(name or CLINIC_TIMEZONE)


def parse_date_input(value: DateInput) -> datetime:
    """
    Parse a calendar date or ISO-8601 datetime.

    Args:
        value: ``YYYY-MM-DD``, ``YYYY-MM-DDTHH:MM[:SS][offset|Z]``, a date or a datetime

    Returns:
        A datetime, timezone-aware only if the input carried an offset

    Raises:
        ValueError: If the value is empty or not a parseable date
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Date is required")

    text = value.strip().replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise ValueError(f"Invalid date: {value!r}") from e


def normalize_to_clinic_day(value: DateInput, tz_name: Optional[str] = None) -> datetime:
    """
    Truncate a date/datetime to the start of its calendar day in the clinic
    timezone and return that instant as naive UTC.

    Naive inputs are read as clinic-local wall time; aware inputs are first
    converted to the clinic timezone, so ``2024-06-15T23:30:00-05:00`` lands
    on 2024-06-15.
    """
    tz = clinic_tz(tz_name)
    parsed = parse_date_input(value)

    if parsed.tzinfo is None:
        local = tz.localize(parsed)
    else:
        local = parsed.astimezone(tz)

    start_of_day = tz.localize(datetime.combine(local.date(), time.min))
    return start_of_day.astimezone(pytz.utc).replace(tzinfo=None)


def to_clinic_date(stored: Optional[datetime], tz_name: Optional[str] = None) -> Optional[date]:
    """Calendar day (clinic-local) of a stored naive-UTC instant"""
    if stored is None:
        return None
    aware = stored if stored.tzinfo else pytz.utc.localize(stored)
    return aware.astimezone(clinic_tz(tz_name)).date()


def format_clinic_date(stored: Optional[datetime], tz_name: Optional[str] = None) -> Optional[str]:
    day = to_clinic_date(stored, tz_name)
    return day.strftime("%Y-%m-%d") if day else None
