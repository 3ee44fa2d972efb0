"""
HTTP error classes.

Controllers and dependencies raise these; the global exception handlers
in core.error_handlers turn them into HAL problem responses.
"""

from typing import Dict, List, Optional

from fastapi import status


class HttpError(Exception):
    """Base error that maps to an HTTP status code."""

    def __init__(self, status_code: int, title: str, detail: Optional[str] = None):
        self.status_code = status_code
        self.title = title
        self.detail = detail or title
        super().__init__(self.detail)


class ValidationError(HttpError):
    """Raised when a request fails validation."""

    def __init__(self, detail: str = "Request validation failed", violations: Optional[List[Dict[str, str]]] = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, "Bad Request", detail)
        self.violations = violations or []


class UnauthorizedError(HttpError):
    def __init__(self, detail: Optional[str] = None):
        super().__init__(status.HTTP_401_UNAUTHORIZED, "Unauthorized", detail)


class ForbiddenError(HttpError):
    def __init__(self, detail: Optional[str] = None):
        super().__init__(status.HTTP_403_FORBIDDEN, "Forbidden", detail)


class NotFoundError(HttpError):
    def __init__(self, detail: Optional[str] = None):
        super().__init__(status.HTTP_404_NOT_FOUND, "Not Found", detail)


class ConflictError(HttpError):
    def __init__(self, detail: Optional[str] = None):
        super().__init__(status.HTTP_409_CONFLICT, "Conflict", detail)
