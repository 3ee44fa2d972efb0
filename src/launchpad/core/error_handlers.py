"""
Global error handling.

Converts HttpError, request validation failures and unexpected exceptions
into HAL problem documents (RFC 7807 shape with a home link).
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .constants import ERROR_UNEXPECTED, HAL_JSON
from .errors import HttpError, ValidationError
from .logging_config import get_trace_id

logger = logging.getLogger(__name__)


def create_error_body(
    request: Request,
    status_code: int,
    title: str,
    detail: Optional[str] = None,
    violations: Optional[List[Dict[str, str]]] = None,
) -> Dict[str, Any]:
    """
    Build a HAL error document.

    Args:
        request: The failing request
        status_code: HTTP status code
        title: Short summary of the problem type
        detail: Explanation specific to this occurrence
        violations: Field level validation failures

    Returns:
        Dictionary ready to be serialized as application/hal+json
    """
    body: Dict[str, Any] = {
        "status": status_code,
        "title": title,
        "detail": detail or title,
        "instance": request.url.path,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "traceId": get_trace_id(request),
        "_links": {"home": {"href": "/", "title": "API Root"}},
    }
    if violations:
        body["violations"] = violations
    return body


def violations_from_request_error(error: RequestValidationError) -> List[Dict[str, str]]:
    """Flatten FastAPI/pydantic errors into {field, message} pairs."""
    violations = []
    for item in error.errors():
        location = [str(part) for part in item.get("loc", ()) if part not in ("body", "path", "query")]
        violations.append({"field": ".".join(location) or "request", "message": item.get("msg", "invalid")})
    return violations


async def handle_http_error(request: Request, error: HttpError) -> JSONResponse:
    violations = error.violations if isinstance(error, ValidationError) else None
    if error.status_code >= 500:
        logger.error(f"{error.title}: {error.detail}")
    return JSONResponse(
        status_code=error.status_code,
        content=create_error_body(request, error.status_code, error.title, error.detail, violations),
        media_type=HAL_JSON,
    )


async def handle_request_validation_error(request: Request, error: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=create_error_body(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Bad Request",
            "Request validation failed",
            violations_from_request_error(error),
        ),
        media_type=HAL_JSON,
    )


async def handle_unexpected_error(request: Request, error: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=create_error_body(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            ERROR_UNEXPECTED,
        ),
        media_type=HAL_JSON,
    )


def register_exception_handlers(application: FastAPI) -> None:
    """Register all global exception handlers with the application."""
    application.add_exception_handler(HttpError, handle_http_error)
    application.add_exception_handler(RequestValidationError, handle_request_validation_error)
    application.add_exception_handler(Exception, handle_unexpected_error)
