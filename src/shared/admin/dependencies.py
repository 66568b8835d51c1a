"""Admin access dependency for the read-only inspection endpoints."""

import os
import hmac
from fastapi import HTTPException, status, Header
from typing import Optional


def verify_admin_secret(
    x_admin_secret: Optional[str] = Header(None, alias="X-Admin-Secret"),
) -> None:
    """
    Guard the log and message queries with a shared secret.

    When ADMIN_SECRET is not configured the endpoints stay open. When it is,
    the request must carry a matching X-Admin-Secret header.

    Raises HTTPException 401 if the header is missing, 403 if it does not match.
    """
    admin_secret = os.environ.get("ADMIN_SECRET")

    if not admin_secret:
        return None

    if not x_admin_secret:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin secret required. Provide X-Admin-Secret header."
        )

    if not hmac.compare_digest(x_admin_secret.encode("utf-8"), admin_secret.encode("utf-8")):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid admin secret"
        )

    return None
