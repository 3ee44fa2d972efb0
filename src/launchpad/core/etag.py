"""
Conditional request support.

List endpoints hash their HAL body into an entity tag. A client that sends
a matching If-None-Match gets 304 Not Modified instead of the body.
"""

import hashlib
import json
from typing import Any, Dict, Optional

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from .constants import HAL_JSON, HEADER_CACHE_CONTROL, HEADER_ETAG, HEADER_IF_NONE_MATCH


def generate_etag(body: Dict[str, Any]) -> str:
    """Hash the canonical JSON form of a response body."""
    content = json.dumps(body, sort_keys=True, separators=(",", ":"), default=str)
    etag_hash = hashlib.md5(content.encode("utf-8")).hexdigest()
    return f'"{etag_hash}"'


def check_etag_match(request: Request, current_etag: str) -> bool:
    """
    Check if the If-None-Match header matches the current ETag.

    Returns True if they match (meaning the client has the current version).
    """
    if_none_match = request.headers.get(HEADER_IF_NONE_MATCH)
    if not if_none_match:
        return False

    # Handle multiple ETags in the header (comma-separated)
    client_etags = [etag.strip() for etag in if_none_match.split(",")]
    return "*" in client_etags or current_etag in client_etags


def cache_headers(etag: str, ttl: int, vary: Optional[str] = "Authorization") -> Dict[str, str]:
    headers = {
        HEADER_ETAG: etag,
        HEADER_CACHE_CONTROL: f"private, max-age={ttl}, must-revalidate",
    }
    if vary:
        headers["Vary"] = vary
    return headers


def conditional_hal_response(request: Request, body: Dict[str, Any], ttl: int) -> Response:
    """
    Return the HAL body with ETag headers, or 304 if the client is current.

    Args:
        request: Incoming request (read for If-None-Match)
        body: Serialized HAL document
        ttl: max-age for Cache-Control in seconds
    """
    etag = generate_etag(body)
    headers = cache_headers(etag, ttl)

    if check_etag_match(request, etag):
        return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers=headers)

    return JSONResponse(content=body, headers=headers, media_type=HAL_JSON)


def hal_response(body: Dict[str, Any], status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Plain HAL response for non-cacheable operations."""
    return JSONResponse(content=body, status_code=status_code, media_type=HAL_JSON)
