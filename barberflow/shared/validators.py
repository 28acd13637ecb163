"""Shared validation utilities"""

import re
from datetime import datetime
from typing import Optional


def validate_date(value: str) -> str:
    """
    Validate a calendar date in YYYY-MM-DD format.

    Raises:
        ValueError: If the date is malformed or does not exist
    """
    datetime.strptime(value, "%Y-%m-%d")
    return value


def validate_time(value: str) -> str:
    """
    Validate a wall-clock time in HH:MM (24h) format.

    Raises:
        ValueError: If the time is malformed
    """
    if not re.fullmatch(r"\d{2}:\d{2}", value or ""):
        raise ValueError("Time must be in HH:MM format")
    datetime.strptime(value, "%H:%M")
    return value


def normalize_phone(phone: str) -> str:
    """
    Normalize a phone number to E.164 dialing format.

    10 digit numbers are assumed to be US numbers and get a +1 prefix,
    anything else is taken to already carry its country code.
    """
    digits = re.sub(r"\D", "", phone)

    if len(digits) == 10 and not phone.strip().startswith("+"):
        return f"+1{digits}"

    return f"+{digits}"


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
