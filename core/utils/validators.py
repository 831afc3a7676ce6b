"""Validation utilities for candidate contact data."""

import re
from typing import Optional


def validate_phone(phone: str) -> tuple[bool, Optional[str]]:
    """
    Validate phone number format (basic validation).

    Args:
        phone: Phone number to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not phone:
        return False, "Phone number is required"

    if not re.fullmatch(r'\+?[\d\s\-\(\)\.]+', phone):
        return False, "Phone number may only contain digits, spaces and + - ( ) ."

    digits = re.findall(r'\d', phone)
    if len(digits) < 7 or len(digits) > 15:
        return False, "Phone number must be between 7 and 15 digits"

    return True, None

