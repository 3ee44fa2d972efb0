"""
FastAPI dependencies for dependency injection.

Provides repository and service instances, the route table and the
authenticated request context.
"""

import logging
import os
from typing import Optional, Tuple

from fastapi import Depends, Request

from launchpad.core.constants import (
    AUTH_SCHEME_API_KEY,
    AUTH_SCHEME_SESSION,
    DEFAULT_SESSION_TTL_HOURS,
    ENV_FEDERATION_TOKENS,
    ENV_SESSION_TTL_HOURS,
    ERROR_AUTH_HEADER_FORMAT,
    ERROR_AUTH_REQUIRED,
    ERROR_INVALID_CREDENTIALS,
    HEADER_FORWARDED_FOR,
    HEADER_USER_AGENT,
    SESSION_COOKIE_NAME,
)
from launchpad.core.errors import UnauthorizedError
from launchpad.models.auth import AuthContext
from launchpad.repository import (
    ApiKeyRepository,
    InMemoryApiKeyRepository,
    InMemorySessionRepository,
    InMemoryUserRepository,
    SessionRepository,
    UserRepository,
)
from launchpad.routing.registration import get_router
from launchpad.services import Authenticator, StaticTokenVerifier, parse_authorization_header

logger = logging.getLogger(__name__)

# Create repository instances (singletons for in-memory storage)
_user_repo = InMemoryUserRepository()
_session_repo = InMemorySessionRepository()
_api_key_repo = InMemoryApiKeyRepository()

# Create service instances
_token_verifier = StaticTokenVerifier(os.getenv(ENV_FEDERATION_TOKENS, "").split(","))
_authenticator = Authenticator(
    _user_repo,
    _session_repo,
    _api_key_repo,
    _token_verifier,
    session_ttl_hours=int(os.getenv(ENV_SESSION_TTL_HOURS, DEFAULT_SESSION_TTL_HOURS)),
)

__all__ = [
    "get_user_repository",
    "get_session_repository",
    "get_api_key_repository",
    "get_authenticator",
    "get_router",
    "get_client_info",
    "get_auth_context",
    "get_optional_auth_context",
    "cache_ttl",
]


def get_user_repository() -> UserRepository:
    """Get user repository instance."""
    return _user_repo


def get_session_repository() -> SessionRepository:
    """Get session repository instance."""
    return _session_repo


def get_api_key_repository() -> ApiKeyRepository:
    """Get API key repository instance."""
    return _api_key_repo


def get_authenticator() -> Authenticator:
    """Get authenticator instance."""
    return _authenticator


def cache_ttl(env_name: str, default: int) -> int:
    """Cache max-age for an endpoint, overridable from the environment."""
    return int(os.getenv(env_name, default))


def get_client_info(request: Request) -> Tuple[str, str]:
    """Client address (first X-Forwarded-For hop) and user agent."""
    forwarded_for = request.headers.get(HEADER_FORWARDED_FOR, "")
    ip_address = forwarded_for.split(",")[0].strip()
    if not ip_address and request.client is not None:
        ip_address = request.client.host
    return ip_address, request.headers.get(HEADER_USER_AGENT, "")


def read_credentials(request: Request) -> Tuple[Optional[str], Optional[str]]:
    """
    Find the caller's session token or API key.

    The Authorization header wins over the session cookie.

    Returns:
        (session_token, api_key), at most one of them set

    Raises:
        UnauthorizedError: If an Authorization header is present but malformed
    """
    header = request.headers.get("Authorization")
    if header:
        scheme, credential = parse_authorization_header(header)
        if scheme == AUTH_SCHEME_SESSION:
            return credential, None
        if scheme == AUTH_SCHEME_API_KEY:
            return None, credential
        raise UnauthorizedError(ERROR_AUTH_HEADER_FORMAT)

    return request.cookies.get(SESSION_COOKIE_NAME) or None, None


async def _resolve_auth_context(request: Request, authenticator: Authenticator) -> Optional[AuthContext]:
    session_token, api_key = read_credentials(request)
    if not session_token and not api_key:
        return None

    ip_address, user_agent = get_client_info(request)
    auth_context = await authenticator.verify(
        session_token=session_token,
        api_key=api_key,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    if auth_context is None:
        raise UnauthorizedError(ERROR_INVALID_CREDENTIALS)

    request.state.auth_context = auth_context
    logger.debug(f"Authenticated user {auth_context.identity.user_id} via {auth_context.access.type}")
    return auth_context


async def get_auth_context(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
) -> AuthContext:
    """Require an authenticated caller (401 otherwise)."""
    auth_context = await _resolve_auth_context(request, authenticator)
    if auth_context is None:
        raise UnauthorizedError(ERROR_AUTH_REQUIRED)
    return auth_context


async def get_optional_auth_context(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
) -> Optional[AuthContext]:
    """Authenticate when credentials are sent; anonymous callers get None."""
    try:
        return await _resolve_auth_context(request, authenticator)
    except UnauthorizedError as auth_error:
        logger.debug(f"Treating caller as anonymous: {auth_error.detail}")
        return None
