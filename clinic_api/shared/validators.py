"""Shared validation utilities"""

import re
from typing import Optional

from .dates import parse_date_input


def validate_required_text(value: Optional[str], field: str = "Value") -> str:
    """
    Require a non-blank string.

    Args:
        value: Raw string from the request
        field: Human-readable field name for the error message

    Returns:
        The stripped string

    Raises:
        ValueError: If the value is missing or blank
    """
    if value is None or not str(value).strip():
        raise ValueError(f"{field} is required and must be a non-empty text")
    return str(value).strip()


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_phone_number(phone: Optional[str]) -> Optional[str]:
    """
    Loose phone validation for emergency contact numbers.

    Keeps the number as entered (trimmed) but requires 7 to 15 digits once
    separators are removed.
    """
    if phone is None:
        return phone

    phone = validate_required_text(phone, "Emergency number")
    digits = re.sub(r"\D", "", phone)
    if not 7 <= len(digits) <= 15:
        raise ValueError("Emergency number must contain between 7 and 15 digits")
    return phone


def validate_date_string(value: Optional[str], field: str = "Date") -> str:
    """Require a string the clinic calendar helpers can parse"""
    text = validate_required_text(value, field)
    try:
        parse_date_input(text)
    except ValueError as e:
        raise ValueError(f"{field} must be a valid date (YYYY-MM-DD or ISO-8601)") from e
    return text


def validate_unique_ids(ids: list[int], field: str = "ids") -> list[int]:
    """Reject non-positive ids and drop duplicates while keeping order"""
    seen: list[int] = []
    for value in ids:
        if value <= 0:
            raise ValueError(f"{field} must contain positive ids")
        if value not in seen:
            seen.append(value)
    return seen
