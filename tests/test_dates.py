from datetime import date, datetime

import pytest

from clinic_api.domain.appointments.status import can_transition
from clinic_api.shared.dates import (
    format_clinic_date,
    normalize_to_clinic_day,
    parse_date_input,
    to_clinic_date,
)


def test_plain_date_is_clinic_midnight():
    assert normalize_to_clinic_day("2024-07-01") == datetime(2024, 7, 1, 6, 0)


def test_offset_is_converted_before_truncating():
    stored = normalize_to_clinic_day("2024-06-15T23:30:00-05:00")

    assert format_clinic_date(stored) == "2024-06-15"


def test_utc_z_suffix_late_evening_rolls_back_a_day():
    stored = normalize_to_clinic_day("2024-06-16T03:00:00Z")

    assert to_clinic_date(stored) == date(2024, 6, 15)


def test_other_timezone():
    assert normalize_to_clinic_day("2024-01-10", "UTC") == datetime(2024, 1, 10, 0, 0)


def test_date_objects_accepted():
    assert normalize_to_clinic_day(date(2024, 7, 1)) == datetime(2024, 7, 1, 6, 0)


@pytest.mark.parametrize("value", ["", "   ", "2024-13-40", "tomorrow"])
def test_unparseable_dates(value):
    with pytest.raises(ValueError):
        parse_date_input(value)


def test_format_none():
    assert format_clinic_date(None) is None


@pytest.mark.parametrize(
    "current,new,allowed",
    [
        ("pending", "confirmed", True),
        ("pending", "cancelled", True),
        ("confirmed", "completed", True),
        ("confirmed", "cancelled", True),
        ("pending", "completed", False),
        ("completed", "pending", False),
        ("cancelled", "confirmed", False),
        ("completed", "completed", True),
    ],
)
def test_status_transitions(current, new, allowed):
    assert can_transition(current, new) is allowed
