"""
Input validation utilities.
"""

import re


class ValidationError(Exception):
    """Raised when validation fails."""

    pass


EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
PIN_PATTERN = r"^\d{4}$"


def validate_email(email: str) -> None:
    """Validate email format."""
    if not email:
        raise ValidationError("Email is required")

    if not re.match(EMAIL_PATTERN, email):
        raise ValidationError("Invalid email format")


def is_pin(value) -> bool:
    """A PIN is exactly four digits, given as a number or a string."""
    if value is None or isinstance(value, bool):
        return False
    return re.match(PIN_PATTERN, str(value).strip()) is not None


def validate_role(role: int, minimum: int, maximum: int) -> None:
    if role < minimum or role > maximum:
        raise ValidationError(f"Invalid role. Must be between {minimum}-{maximum}")


def require_text(value, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()
