"""Helpers for building and storing event log entries."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from src.shared.database import utcnow
from src.shared.event_log.database import EventLog

logger = logging.getLogger(__name__)

# Event names the portfolio front-end and server emit. Other names are still stored.
EVENT_NAMES = frozenset({
    "page_view",
    "contact_form_started",
    "contact_form_success",
    "contact_form_error",
    "navigation_click",
    "resume_download",
    "project_click",
    "social_click",
    "skill_hover",
    "contact_form_submitted",
})

UNKNOWN_EVENT = "unknown"
MAX_EVENT_NAME_LENGTH = 100


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 instant (``Z`` suffix allowed) into naive UTC.
    Returns None for anything unparseable so the caller can fall back to server time.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def normalize_event_name(event: Any) -> str:
    if not isinstance(event, str) or not event.strip():
        return UNKNOWN_EVENT
    return event.strip()[:MAX_EVENT_NAME_LENGTH]


def normalize_event_data(data: Any, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Coerce the free-form payload into a JSON object.
    Scalars and lists are wrapped as ``{"value": ...}``; extra envelope keys are
    folded in without overriding keys the payload already has.
    """
    if data is None:
        normalized: Dict[str, Any] = {}
    elif isinstance(data, dict):
        normalized = dict(data)
    else:
        normalized = {"value": data}

    for key, value in (extra or {}).items():
        normalized.setdefault(key, value)
    return normalized


def append_event(
    db: Session,
    event: str,
    session_id: Optional[str] = None,
    data: Optional[Dict[str, Any]] = None,
    url: Optional[str] = None,
    user_agent: Optional[str] = None,
    ip_address: Optional[str] = None,
    referrer: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> EventLog:
    """Store one event. Rolls back and re-raises on a storage error."""
    entry = EventLog(
        timestamp=timestamp or utcnow(),
        session_id=session_id,
        event=event,
        data=data or {},
        url=url,
        user_agent=user_agent,
        ip_address=ip_address,
        referrer=referrer,
    )
    try:
        db.add(entry)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return entry


def record_event(db: Session, event: str, **fields) -> Optional[EventLog]:
    """
    Best-effort variant of append_event for incidental logging.
    A storage failure is logged and swallowed; returns None in that case.
    """
    try:
        return append_event(db, event, **fields)
    except Exception as e:
        logger.warning(f"Failed to record '{event}' event: {str(e)}")
        return None
