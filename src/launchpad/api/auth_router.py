"""
Authentication endpoints: federate, verify and revoke sessions.

A browser keeps its session token in an HTTP-only cookie; other clients
send it as ``Authorization: SessionToken <token>``.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request, Response, status

from launchpad.adapters import AuthContextAdapter, MessageAdapter
from launchpad.core.constants import (
    AUTH_SCHEME_SESSION,
    ERROR_BEARER_REQUIRED,
    ERROR_FEDERATION_FAILED,
    ERROR_NO_SESSION,
    ERROR_VERIFY_SESSION_ONLY,
    SESSION_COOKIE_NAME,
    SUCCESS_SESSION_REVOKED,
)
from launchpad.core.errors import ConflictError, UnauthorizedError
from launchpad.core.etag import hal_response
from launchpad.hal.models import HalLink
from launchpad.models.auth import FederateRequest
from launchpad.models.user import utc_now
from launchpad.repository import AlreadyExistsError
from launchpad.routing.registration import route_name
from launchpad.routing.router import Router
from launchpad.services import Authenticator, parse_authorization_header
from .dependencies import get_authenticator, get_client_info, get_router

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def set_session_cookie(request: Request, response: Response, session_token: str, expires: datetime) -> None:
    max_age = max(0, int((expires - utc_now()).total_seconds()))
    response.set_cookie(
        SESSION_COOKIE_NAME,
        session_token,
        max_age=max_age,
        httponly=True,
        secure=request.url.scheme == "https",
        samesite="lax",
        path="/",
    )


def read_session_token(request: Request) -> str:
    """
    Session token from the Authorization header or the session cookie.

    Raises:
        UnauthorizedError: If neither carries a session token
    """
    header = request.headers.get("Authorization")
    if header:
        scheme, credential = parse_authorization_header(header)
        if scheme != AUTH_SCHEME_SESSION:
            raise UnauthorizedError(ERROR_VERIFY_SESSION_ONLY)
        return credential

    cookie_token = request.cookies.get(SESSION_COOKIE_NAME)
    if not cookie_token:
        raise UnauthorizedError(ERROR_NO_SESSION)
    return cookie_token


@router.post("/federate", name=route_name("auth", "federate"), summary="Start a session")
async def federate_endpoint(
    request: Request,
    federation: FederateRequest,
    authenticator: Authenticator = Depends(get_authenticator),
    route_table: Router = Depends(get_router),
):
    """
    Exchange an identity provider bearer token for a session.

    The session token is the client's session key plus the user id; it is
    set as a cookie and never echoed in the body.
    """
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        raise UnauthorizedError(ERROR_BEARER_REQUIRED)

    ip_address, user_agent = get_client_info(request)
    try:
        result = await authenticator.authenticate(
            access_token=header[len("Bearer "):].strip(),
            session_key=federation.session_key,
            email=federation.email,
            first_name=federation.first_name,
            last_name=federation.last_name,
            ip_address=ip_address,
            user_agent=user_agent,
        )
    except AlreadyExistsError as duplicate_error:
        raise ConflictError(str(duplicate_error))

    if result is None:
        raise UnauthorizedError(ERROR_FEDERATION_FAILED)

    auth_context, session_token = result
    logger.info(f"Session started for user {auth_context.identity.user_id}")
    response = hal_response(AuthContextAdapter(auth_context, route_table).to_json())
    set_session_cookie(request, response, session_token, auth_context.access.date_expires)
    return response


@router.post("/verify", name=route_name("auth", "verify"), summary="Verify the current session")
async def verify_endpoint(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
    route_table: Router = Depends(get_router),
):
    session_token = read_session_token(request)
    ip_address, user_agent = get_client_info(request)

    auth_context = await authenticator.verify(
        session_token=session_token, ip_address=ip_address, user_agent=user_agent
    )
    if auth_context is None:
        raise UnauthorizedError("Session verification failed")

    response = hal_response(AuthContextAdapter(auth_context, route_table).to_json())

    # Refresh the cookie's lifetime for cookie-based callers
    if "Authorization" not in request.headers:
        set_session_cookie(request, response, session_token, auth_context.access.date_expires)
    return response


@router.post("/revoke", name=route_name("auth", "revoke"), summary="End the current session")
async def revoke_endpoint(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
    route_table: Router = Depends(get_router),
):
    session_token = read_session_token(request)
    await authenticator.revoke(session_token)

    adapter = MessageAdapter(
        route_table,
        SUCCESS_SESSION_REVOKED,
        links={
            "federate": HalLink(href=route_table.build_href("auth", "federate"), title="Federate Session"),
        },
    )
    response = hal_response(adapter.to_json(), status_code=status.HTTP_200_OK)
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")
    return response
