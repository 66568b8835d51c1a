"""
Client-side event logger.

Each call to ``log`` builds one event envelope and posts it to the server's
log intake on a background worker. Delivery is best-effort: failures are
logged as warnings and never reach the caller. There is no retry and no
batching.
"""

import logging
import secrets
import time
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"portfolio-client/httpx-{httpx.__version__}"
DEFAULT_TIMEOUT = 5.0


def generate_session_id() -> str:
    """Opaque id of the form ``session_<epoch-ms>_<random>``."""
    return f"session_{int(time.time() * 1000)}_{secrets.token_hex(5)}"


class EventLogger:
    """
    Fire-and-forget event logger owned by the application root.

    Args:
        endpoint: Full URL of the server log intake (``.../api/log``)
        session_id: Session identifier; generated once per logger if omitted
        url: Page URL reported with every event
        user_agent: User agent reported with every event
        http_client: Shared httpx.Client; the logger creates and owns one if omitted
        clock: Returns the current instant, injectable for tests
    """

    def __init__(
        self,
        endpoint: str,
        session_id: Optional[str] = None,
        url: Optional[str] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        http_client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_workers: int = 2,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.endpoint = endpoint
        self.session_id = session_id or generate_session_id()
        self.url = url
        self.user_agent = user_agent
        self.timeout = timeout
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="event-logger")
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._closed = False

    def build_envelope(self, event: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return {
            "timestamp": self._clock().isoformat(),
            "sessionId": self.session_id,
            "event": event,
            "data": data or {},
            "url": self.url,
            "userAgent": self.user_agent,
        }

    def log(self, event: str, data: Optional[Dict[str, Any]] = None) -> Optional[Future]:
        """
        Queue one event for delivery and return immediately.

        Returns the Future of the background send (resolving to True when the
        server accepted the event), or None if the logger is already closed.
        """
        if self._closed:
            logger.warning(f"Event logger closed, dropping '{event}' event")
            return None

        envelope = self.build_envelope(event, data)
        try:
            return self._executor.submit(self._send, envelope)
        except RuntimeError as e:
            # Executor shut down between the check above and submit
            logger.warning(f"Failed to queue '{event}' event: {str(e)}")
            return None

    def _send(self, envelope: Dict[str, Any]) -> bool:
        try:
            response = self._client.post(self.endpoint, json=envelope, timeout=self.timeout)
        except Exception as e:
            logger.warning(f"Failed to send '{envelope['event']}' event: {str(e)}")
            return False

        if response.is_error:
            logger.warning(f"Log endpoint rejected '{envelope['event']}' event with status {response.status_code}")
            return False
        return True

    def close(self, wait: bool = True) -> None:
        """Stop accepting events and wait for in-flight sends to finish."""
        self._closed = True
        self._executor.shutdown(wait=wait)
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "EventLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
