"""Shared validation utilities"""

import re
from datetime import datetime, timedelta
from typing import Optional

from ..security import check_password_strength

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
TIME_PATTERN = re.compile(r"^([0-1]\d|2[0-3]):([0-5]\d)$")


def validate_name(name: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace and reject blank names"""
    if name is None:
        return name
    name = name.strip()
    if not name:
        raise ValueError("Name is required")
    return name


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a phone number to E.164 format.

    Args:
        phone: Phone number string in various formats

    Returns:
        Normalized phone number in E.164 format (+XXXXXXXXXXX)

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone:
        return phone

    # Remove all non-digit characters
    digits = re.sub(r"\D", "", phone)

    if len(digits) < 8 or len(digits) > 15:
        raise ValueError("Phone number must have between 8 and 15 digits")

    return f"+{digits}"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format")

    return email


def validate_password(password: str) -> str:
    """Raise ValueError listing every password policy requirement that is not met"""
    problems = check_password_strength(password)
    if problems:
        raise ValueError("; ".join(problems))
    return password


def validate_time(value: Optional[str]) -> Optional[str]:
    """Validate a 24h HH:MM time string"""
    if value is None:
        return value
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM format")
    return value


def time_to_minutes(value: str) -> int:
    """Convert HH:MM to minutes since midnight"""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def day_of_week(date_value) -> int:
    """Day index for a date, with 0 = Sunday ... 6 = Saturday"""
    return (date_value.weekday() + 1) % 7


def add_minutes(value: str, minutes: int) -> str:
    """Shift an HH:MM time by minutes"""
    shifted = datetime.strptime(value, "%H:%M") + timedelta(minutes=minutes)
    return shifted.strftime("%H:%M")


def minutes_to_time(minutes: int) -> str:
    """Inverse of time_to_minutes; midnight at the end of the day is "24:00" """
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
