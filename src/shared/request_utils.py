"""Helpers for reading client context off incoming requests."""

from typing import Optional
from fastapi import Request


def get_client_ip(request: Request) -> str:
    """Get the client IP address as seen by the server."""
    # Check for forwarded IP (from proxy/load balancer)
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain
        return forwarded.split(",")[0].strip()
    # Fallback to direct connection
    return request.client.host if request.client else "unknown"


def get_user_agent(request: Request) -> Optional[str]:
    return request.headers.get("User-Agent")


def get_referrer(request: Request) -> Optional[str]:
    return request.headers.get("Referer") or request.headers.get("Origin")
