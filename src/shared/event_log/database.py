"""Database models for client and server event logs."""

from sqlalchemy import Column, String, DateTime, Text, JSON, Index
from sqlalchemy.dialects.postgresql import JSONB
import uuid

# Import Base from the shared database module to use the same declarative base
from src.shared.database import Base, utcnow


class EventLog(Base):
    """One discrete client or server event. Append-only."""
    __tablename__ = "event_logs"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    timestamp = Column(DateTime, default=utcnow, nullable=False, index=True)  # Client instant when supplied
    session_id = Column(String, nullable=True, index=True)
    event = Column(String, nullable=False, index=True)
    data = Column(JSON().with_variant(JSONB, "postgresql"), nullable=True)
    url = Column(Text, nullable=True)
    user_agent = Column(Text, nullable=True)
    ip_address = Column(String, nullable=True)
    referrer = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)  # When the server stored it

    __table_args__ = (
        Index('idx_event_logs_event_timestamp', 'event', 'timestamp'),
    )
