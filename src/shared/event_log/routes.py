"""Event log routes: fire-and-forget intake and the offline log query."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional
from fastapi import APIRouter, Depends, Request, Query
from sqlalchemy.orm import Session

from src.shared.admin.dependencies import verify_admin_secret
from src.shared.database import get_db
from src.shared.errors import PersistenceError, ValidationError
from src.shared.event_log.database import EventLog
from src.shared.event_log.log_utils import (
    EVENT_NAMES,
    append_event,
    normalize_event_data,
    normalize_event_name,
    parse_timestamp,
)
from src.shared.event_log.schemas import (
    LogEventRequest,
    LogIntakeResponse,
    LogEntryResponse,
    LogsResponse,
)
from src.shared.request_utils import get_client_ip, get_user_agent, get_referrer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["logs"])

MAX_TEXT_FIELD_LENGTH = 2000


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text[:MAX_TEXT_FIELD_LENGTH] if text else None


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


@router.post("/log", response_model=LogIntakeResponse)
def ingest_log(
    payload: LogEventRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Append one client event to the log store.

    The observed source address is stamped on the entry. Only a storage error
    produces a failure response, and callers are expected to ignore it.
    """
    event = normalize_event_name(payload.event)
    if event not in EVENT_NAMES:
        logger.debug(f"Storing event outside the known vocabulary: '{event}'")
    try:
        append_event(
            db,
            event,
            session_id=_optional_text(payload.session_id),
            data=normalize_event_data(payload.data, extra=payload.model_extra),
            url=_optional_text(payload.url),
            user_agent=_optional_text(payload.user_agent) or get_user_agent(request),
            ip_address=get_client_ip(request),
            referrer=get_referrer(request),
            timestamp=parse_timestamp(payload.timestamp),
        )
    except Exception as e:
        logger.error(f"Failed to save '{event}' log entry: {str(e)}", exc_info=True)
        raise PersistenceError("Failed to save log")

    return LogIntakeResponse(success=True)


@router.get("/logs", response_model=LogsResponse)
def query_logs(
    event: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    _admin: None = Depends(verify_admin_secret),
):
    """Stored events matching the filters, newest first, capped at limit."""
    start_date = _to_naive_utc(start_date)
    end_date = _to_naive_utc(end_date)
    if start_date and end_date and start_date > end_date:
        raise ValidationError("startDate must not be after endDate")

    query = db.query(EventLog)
    if event:
        query = query.filter(EventLog.event == event)
    if start_date:
        query = query.filter(EventLog.timestamp >= start_date)
    if end_date:
        query = query.filter(EventLog.timestamp <= end_date)

    entries = query.order_by(EventLog.timestamp.desc(), EventLog.created_at.desc()).limit(limit).all()

    return LogsResponse(
        logs=[
            LogEntryResponse(
                id=entry.id,
                timestamp=entry.timestamp,
                session_id=entry.session_id,
                event=entry.event,
                data=entry.data,
                url=entry.url,
                user_agent=entry.user_agent,
                ip_address=entry.ip_address,
                referrer=entry.referrer,
            )
            for entry in entries
        ]
    )
