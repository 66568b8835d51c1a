"""Pydantic schemas for event log API."""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime


class LogEventRequest(BaseModel):
    """
    Event envelope posted by the client logger.

    Every field is optional and loosely typed; unknown top-level keys are kept
    and folded into the stored ``data``.
    """
    event: Optional[Any] = None
    session_id: Optional[Any] = Field(None, alias="sessionId")
    timestamp: Optional[Any] = None  # ISO-8601 instant from the client clock
    data: Optional[Any] = None
    url: Optional[Any] = None
    user_agent: Optional[Any] = Field(None, alias="userAgent")

    class Config:
        extra = "allow"
        populate_by_name = True


class LogIntakeResponse(BaseModel):
    success: bool = True


class LogEntryResponse(BaseModel):
    """A stored event as returned by the log query."""
    id: str
    timestamp: datetime
    session_id: Optional[str] = Field(None, alias="sessionId")
    event: str
    data: Optional[Dict[str, Any]] = None
    url: Optional[str] = None
    user_agent: Optional[str] = Field(None, alias="userAgent")
    ip_address: Optional[str] = Field(None, alias="ip")
    referrer: Optional[str] = None

    class Config:
        from_attributes = True
        populate_by_name = True


class LogsResponse(BaseModel):
    success: bool = True
    logs: List[LogEntryResponse]
