"""Portfolio Service - FastAPI server for the portfolio contact form and event log."""

import time
import logging
from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.shared.config import (
    get_allowed_origins,
    get_environment,
    get_port,
    missing_mail_settings,
)
from src.shared.database import init_db
from src.shared.errors import NotFound
from src.shared.contact.routes import router as contact_router
from src.shared.event_log.routes import router as event_log_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

APP_START_TIME = time.time()
ALLOWED_ORIGINS = get_allowed_origins()

app = FastAPI(
    title="Portfolio Service",
    description="Contact form intake and event logging for the portfolio website",
    version="0.1.0"
)


# Initialize database on startup
@app.on_event("startup")
async def startup_event():
    try:
        init_db()
    except Exception as e:
        # Refuse to serve requests without a working store
        logging.critical(f"Database connection failed on startup: {str(e)}", exc_info=True)
        raise

    missing = missing_mail_settings()
    if missing:
        logging.warning(f"Missing mail settings, contact notifications will fail: {', '.join(missing)}")
    logging.info(f"Portfolio Service started ({get_environment()}), allowed origins: {', '.join(ALLOWED_ORIGINS)}")


# Include contact routes
app.include_router(contact_router)

# Include event log routes
app.include_router(event_log_router)

# CORS configuration - must be added before exception handlers
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


def _cors_headers(request: Request) -> dict:
    """CORS headers for error responses, which can bypass the middleware."""
    headers = {}
    origin = request.headers.get("origin")
    if origin and origin.rstrip("/") in ALLOWED_ORIGINS:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Access-Control-Allow-Credentials"] = "true"
        headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        headers["Access-Control-Allow-Headers"] = "*"
    return headers


def _error_response(request: Request, status_code: int, error: str, headers: dict = None) -> JSONResponse:
    merged = dict(headers or {})
    merged.update(_cors_headers(request))
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error},
        headers=merged
    )


def _validation_message(errors: list) -> str:
    """Human-readable summary of the first request validation error."""
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query"))
    message = first.get("msg", "Invalid value")
    return f"Invalid {location}: {message}" if location else f"Invalid request: {message}"


# Global exception handlers render every failure as {"success": false, "error": ...}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Covers FastAPI HTTPException and the error kinds in src.shared.errors."""
    if exc.status_code == 404 and not isinstance(exc, NotFound):
        # Router miss: Starlette raises a bare 404
        exc = NotFound()

    if isinstance(exc.detail, str):
        error = exc.detail
    else:
        error = str(exc.detail)

    return _error_response(request, exc.status_code, error, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query parameters are client errors (400)."""
    logging.info(f"Request validation failed for {request.url.path}: {exc.errors()}")
    return _error_response(request, 400, _validation_message(exc.errors()))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Last-resort handler. Details go to the log only."""
    logging.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return _error_response(request, 500, "Internal server error")


@app.get("/")
async def root():
    return {"message": "Portfolio Service API is running", "status": "ok"}


@app.get("/api/health")
async def health():
    return {
        "success": True,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.time() - APP_START_TIME, 3),
        "environment": get_environment(),
    }


def main() -> None:
    """Run the API server with uvicorn on the configured PORT."""
    import uvicorn

    uvicorn.run("src.app:app", host="0.0.0.0", port=get_port(), log_level="info")


if __name__ == "__main__":
    main()
