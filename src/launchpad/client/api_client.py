"""
HTTP client for HAL APIs.

Thin wrapper around requests.Session: JSON in and out, errors raised as
ApiClientError, and an opportunistic ETag cache so that re-fetching an
unchanged resource costs a 304.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import requests

from launchpad.core.constants import APPLICATION_JSON, HAL_JSON, HEADER_ETAG, HEADER_FORWARDED_FOR, HEADER_IF_NONE_MATCH

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30
HTTP_NOT_MODIFIED = 304
HTTP_REQUEST_TIMEOUT = 408

CacheKey = Tuple[str, str, str]


class ApiClientError(Exception):
    """A request failed; ``status`` is 0 for network errors."""

    def __init__(self, status: int, message: str, body: Optional[Dict[str, Any]] = None):
        self.status = status
        self.message = message
        self.body = body or {}
        super().__init__(message)


@dataclass
class CachedResponse:
    etag: str
    body: Dict[str, Any]


class ApiClient:
    """
    JSON client bound to one API base URL.

    Example usage:
        ```python
        client = ApiClient("http://localhost:8000")
        client.set_headers({"Authorization": "SessionToken abc"})
        root = client.get("/")
        ```
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: int = DEFAULT_TIMEOUT_SECONDS,
        default_headers: Optional[Dict[str, str]] = None,
        mode: str = "production",
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            base_url: Base URL of the API server
            timeout: Request timeout in seconds
            default_headers: Headers sent with every request
            mode: "development" adds an X-Forwarded-For header, which a
                load balancer would normally set
            session: Session to send requests through; cookies persist on it
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.mode = mode
        self.session = session or requests.Session()
        self.default_headers: Dict[str, str] = dict(default_headers or {})
        self._etag_cache: Dict[CacheKey, CachedResponse] = {}

    def request(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        cacheable: Optional[bool] = None,
        force_refresh: bool = False,
    ) -> Dict[str, Any]:
        """
        Send a request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Root-relative path or absolute URL
            json_body: Body sent as application/json
            headers: Per-request headers, merged over the defaults
            cacheable: Use the ETag cache; defaults to True for GET only
            force_refresh: Skip If-None-Match so the server sends a full body

        Raises:
            ApiClientError: On an error status, timeout or network failure
        """
        method = method.upper()
        url = path if path.startswith(("http://", "https://")) else f"{self.base_url}{path}"
        if cacheable is None:
            cacheable = method == "GET"

        request_headers = {"Accept": APPLICATION_JSON, **self.default_headers}
        if self.mode == "development":
            request_headers[HEADER_FORWARDED_FOR] = "127.0.0.1"
        request_headers.update(headers or {})

        cache_key = (method, url, json.dumps(json_body, sort_keys=True))
        cached = self._etag_cache.get(cache_key) if cacheable else None
        if cached is not None and not force_refresh:
            request_headers[HEADER_IF_NONE_MATCH] = cached.etag

        logger.debug(f"API request: {method} {url}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=request_headers,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            raise ApiClientError(HTTP_REQUEST_TIMEOUT, "Request timed out")
        except requests.exceptions.RequestException as request_error:
            logger.error(f"Request failed: {request_error}")
            raise ApiClientError(0, "Network error occurred")

        if response.status_code == HTTP_NOT_MODIFIED and cached is not None:
            logger.debug(f"Not modified: {method} {url}")
            return cached.body

        if response.status_code >= 400:
            self._raise_for_error(response)

        if response.status_code == 204 or not response.content:
            return {}

        body = response.json()
        etag = response.headers.get(HEADER_ETAG)
        if cacheable and etag:
            self._etag_cache[cache_key] = CachedResponse(etag=etag, body=body)
        return body

    def _raise_for_error(self, response: requests.Response) -> None:
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            message = body.get("detail") or body.get("message") or body.get("title") or "An error occurred"
        else:
            body = None
            message = f"HTTP {response.status_code}: {response.reason}"

        logger.error(f"API error {response.status_code}: {message}")
        raise ApiClientError(response.status_code, message, body)

    def get(self, path: str, force_refresh: bool = False) -> Dict[str, Any]:
        return self.request("GET", path, headers={"Accept": HAL_JSON}, force_refresh=force_refresh)

    def post(self, path: str, data: Any = None) -> Dict[str, Any]:
        return self.request("POST", path, json_body=data)

    def put(self, path: str, data: Any = None) -> Dict[str, Any]:
        return self.request("PUT", path, json_body=data)

    def patch(self, path: str, data: Any = None) -> Dict[str, Any]:
        return self.request("PATCH", path, json_body=data)

    def delete(self, path: str) -> Dict[str, Any]:
        return self.request("DELETE", path)

    def health(self) -> Dict[str, Any]:
        """Check API health status."""
        return self.get("/health")

    def set_headers(self, headers: Dict[str, str]) -> None:
        self.default_headers.update(headers)

    def clear_header(self, name: str) -> None:
        self.default_headers.pop(name, None)

    def clear_cache(self) -> None:
        self._etag_cache.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.session.close()
