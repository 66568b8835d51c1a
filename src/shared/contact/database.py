"""Database models for contact form submissions."""

from sqlalchemy import Column, String, DateTime, Text
import uuid

# Import Base from the shared database module to use the same declarative base
from src.shared.database import Base, utcnow


class ContactMessage(Base):
    """A validated contact form submission. Never updated or deleted."""
    __tablename__ = "contact_messages"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)  # Stored lowercase
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
