"""Error kinds raised by the API routes.

Each one is an HTTPException so the app-level handlers render it as
``{"success": false, "error": detail}`` with the matching status code.
"""

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """Missing or malformed input. Raised before any side effect."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class PersistenceError(HTTPException):
    """The store was unreachable or the write failed."""

    def __init__(self, detail: str = "Failed to save message. Please try again later."):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class NotificationError(HTTPException):
    """Mail dispatch failed. Any record stored earlier in the request is kept."""

    def __init__(self, detail: str = "Failed to send message. Please try again later."):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Route not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
