"""Pydantic schemas for contact API."""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class ContactRequest(BaseModel):
    """
    Schema for contact form submission.

    Fields are optional at the schema level so that a missing field is
    reported by the route as a 400 "All fields are required" rather than a
    schema error.
    """
    name: Optional[str] = Field(None, description="Your name")
    email: Optional[str] = Field(None, description="Your email address")
    message: Optional[str] = Field(None, description="Your message")


class ContactResponse(BaseModel):
    """Schema for contact form response."""
    success: bool
    message: str


class ContactMessageResponse(BaseModel):
    """A stored contact message as returned by the message query."""
    id: str
    name: str
    email: str
    message: str
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class MessagesPagination(BaseModel):
    current: int
    total: int  # Total number of pages
    count: int  # Items on this page
    total_messages: int = Field(..., alias="totalMessages")

    class Config:
        populate_by_name = True


class MessagesResponse(BaseModel):
    success: bool = True
    messages: List[ContactMessageResponse]
    pagination: MessagesPagination
