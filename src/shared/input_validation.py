"""
Input validation and normalization utilities.
Every check raises ValidationError before any side effect takes place.
"""

import re
from typing import Optional, Any

from src.shared.errors import ValidationError


# Maximum lengths for different input types
MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 255
MAX_MESSAGE_LENGTH = 5000

# Two-part address with a dotted domain: local@domain.tld
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

REQUIRED_FIELDS_MESSAGE = "All fields are required"


def normalize_text(value: Optional[Any]) -> str:
    """Trim surrounding whitespace; missing values become an empty string."""
    if value is None:
        return ""
    return str(value).strip()


def validate_required_text(value: Optional[str], field_name: str, max_length: Optional[int] = None) -> str:
    """
    Validate a required free-text field and return it trimmed.

    Args:
        value: Raw field value (None when the field was omitted)
        field_name: Field name for error messages
        max_length: Maximum allowed length after trimming (None for no limit)

    Raises:
        ValidationError if the field is missing, blank or too long
    """
    text = normalize_text(value)

    if not text:
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)

    if max_length and len(text) > max_length:
        raise ValidationError(f"{field_name} must be no more than {max_length} characters")

    return text


def validate_email(email: Optional[str]) -> str:
    """
    Validate email address format and length.

    Returns:
        Normalized email (trimmed, lowercase)

    Raises:
        ValidationError if validation fails
    """
    email = normalize_text(email).lower()

    if not email:
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)

    if len(email) > MAX_EMAIL_LENGTH:
        raise ValidationError(f"Email must be no more than {MAX_EMAIL_LENGTH} characters")

    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email format")

    return email
