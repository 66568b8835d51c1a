"""Process configuration read from environment variables."""

import os
import logging
from typing import List

DEFAULT_ALLOWED_ORIGINS = ["http://localhost:3000"]
DEFAULT_PORT = 5000
DEFAULT_SMTP_TIMEOUT = 10.0

# Mail settings the notification step cannot work without
REQUIRED_MAIL_ENV = ["SMTP_USER", "SMTP_PASSWORD"]


def get_allowed_origins() -> List[str]:
    """Comma-separated ALLOWED_ORIGINS, falling back to the local dev client."""
    raw = os.environ.get("ALLOWED_ORIGINS", "")
    origins = [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]
    return origins or list(DEFAULT_ALLOWED_ORIGINS)


def get_port() -> int:
    try:
        return int(os.environ.get("PORT", DEFAULT_PORT))
    except ValueError:
        logging.warning(f"Invalid PORT value {os.environ.get('PORT')!r}, using {DEFAULT_PORT}")
        return DEFAULT_PORT


def get_environment() -> str:
    return os.environ.get("ENVIRONMENT", "development")


def get_smtp_timeout() -> float:
    """Upper bound in seconds for the SMTP connection and each command."""
    try:
        timeout = float(os.environ.get("SMTP_TIMEOUT", DEFAULT_SMTP_TIMEOUT))
    except ValueError:
        return DEFAULT_SMTP_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_SMTP_TIMEOUT


def get_contact_recipient() -> str:
    """Address that receives contact notifications (defaults to the SMTP account)."""
    return os.environ.get("CONTACT_RECIPIENT") or os.environ.get("SMTP_USER", "")


def missing_mail_settings() -> List[str]:
    return [var for var in REQUIRED_MAIL_ENV if not os.environ.get(var)]
