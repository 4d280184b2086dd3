# clinic_scheduler/core/middleware.py
"""Request tracing, request logging and the database error handler"""
import uuid
import time
import logging

from fastapi import status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.requests import Request

from clinic_scheduler.config.settings import get_settings
from clinic_scheduler.schemas.appointment import BookingOutcome
from clinic_scheduler.utils.my_logging import correlation_id_var

logger = logging.getLogger(__name__)
settings = get_settings()

CORRELATION_HEADER = "X-Correlation-ID"


async def correlation_id_middleware(request: Request, call_next):
    """Tag the request (and every log line it emits) with a correlation id"""
    correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
    request.state.correlation_id = correlation_id
    token = correlation_id_var.set(correlation_id)

    try:
        response = await call_next(request)
    finally:
        correlation_id_var.reset(token)

    response.headers[CORRELATION_HEADER] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = round((time.perf_counter() - started) * 1000, 2)

    message = f"{request.method} {request.url.path} -> {response.status_code} in {duration_ms}ms"
    if duration_ms > settings.SLOW_REQUEST_MS:
        logger.warning(f"Slow request: {message}")
    else:
        logger.info(message)

    return response


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """
    Read endpoints that have no fallback (listings, calendar counts, leave
    management) surface a lost database as 503, shaped like a failed booking.
    """
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": {"outcome": BookingOutcome.ERROR.value, "message": "Database unavailable"}}
    )
