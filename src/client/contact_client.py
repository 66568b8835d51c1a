"""Client-side contact form submission."""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from src.client.event_logger import EventLogger

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "All fields are required"
NETWORK_ERROR_MESSAGE = "Failed to send message! Please check your network and try again."
GENERIC_ERROR_MESSAGE = "Failed to send message! Please try again."


@dataclass
class SubmissionResult:
    """Outcome shown to the visitor after one submission attempt."""
    success: bool
    message: str
    status_code: Optional[int] = None


class ContactClient:
    """
    Posts the contact form to ``/api/send-email``.

    Each call to ``submit`` makes at most one request. Blank fields are
    rejected locally without touching the network.
    """

    def __init__(
        self,
        base_url: str,
        http_client: Optional[httpx.Client] = None,
        event_logger: Optional[EventLogger] = None,
        timeout: float = 15.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = http_client or httpx.Client(timeout=timeout)
        self._owns_client = http_client is None
        self.event_logger = event_logger

    def _log(self, event: str, data: Optional[dict] = None) -> None:
        if self.event_logger is not None:
            self.event_logger.log(event, data)

    def submit(self, name: str, email: str, message: str) -> SubmissionResult:
        payload = {
            "name": "" if name is None else str(name),
            "email": "" if email is None else str(email),
            "message": "" if message is None else str(message),
        }

        if not all(value.strip() for value in payload.values()):
            return SubmissionResult(success=False, message=REQUIRED_FIELDS_MESSAGE)

        self._log("contact_form_started", {"message_length": len(payload["message"])})

        try:
            response = self._client.post(f"{self.base_url}/api/send-email", json=payload)
        except httpx.HTTPError as e:
            logger.warning(f"Contact form request failed: {str(e)}")
            self._log("contact_form_error", {"reason": "network"})
            return SubmissionResult(success=False, message=NETWORK_ERROR_MESSAGE)

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_success:
            self._log("contact_form_success")
            return SubmissionResult(
                success=True,
                message=body.get("message", "Message sent successfully!"),
                status_code=response.status_code,
            )

        self._log("contact_form_error", {"status": response.status_code})
        return SubmissionResult(
            success=False,
            message=body.get("error") or GENERIC_ERROR_MESSAGE,
            status_code=response.status_code,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
