"""
Logging setup and request logging middleware.

Every request gets a trace id (from the load balancer header when present)
that is attached to request.state and echoed in the response headers.
"""

import logging
import os
import time
import uuid
from typing import Optional

from fastapi import Request

from .constants import (
    DEFAULT_LOG_LEVEL,
    ENV_LOG_LEVEL,
    HEADER_AMZN_TRACE_ID,
    HEADER_TRACE_ID,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    PERFORMANCE_WARNING_THRESHOLD_MS,
)

logger = logging.getLogger("launchpad.requests")


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging from the LOG_LEVEL environment variable."""
    level_name = (level or os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


def resolve_trace_id(request: Request) -> str:
    """Use the incoming trace header or mint a new id."""
    return (
        request.headers.get(HEADER_TRACE_ID)
        or request.headers.get(HEADER_AMZN_TRACE_ID)
        or uuid.uuid4().hex
    )


def get_trace_id(request: Request) -> str:
    return getattr(request.state, "trace_id", None) or "unknown"


async def request_logging_middleware(request: Request, call_next):
    """
    Log request start, completion and failure with timing.

    Registered as HTTP middleware so it wraps authentication, the endpoint
    and the error handlers.
    """
    trace_id = resolve_trace_id(request)
    request.state.trace_id = trace_id
    context = f"{request.method} {request.url.path} trace={trace_id}"

    logger.debug(f"Request started: {context}")
    start_time = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.exception(f"Request failed: {context} duration={duration_ms:.1f}ms")
        raise

    duration_ms = (time.perf_counter() - start_time) * 1000
    response.headers[HEADER_TRACE_ID] = trace_id

    message = f"Request completed: {context} status={response.status_code} duration={duration_ms:.1f}ms"
    if duration_ms > PERFORMANCE_WARNING_THRESHOLD_MS:
        logger.warning(f"Slow request: {message}")
    else:
        logger.info(message)

    return response
