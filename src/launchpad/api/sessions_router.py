"""
Session endpoints.

Support staff may list and revoke anyone's sessions; everyone else only
their own. Revoking requires a session.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request

from launchpad.adapters import CollectionItemAdapter, MessageAdapter, SessionCollectionAdapter
from launchpad.core.constants import ENV_SESSION_CACHE_TTL, SESSION_CACHE_TTL_SECONDS, TEMPLATE_COLLECTION
from launchpad.core.errors import NotFoundError as HttpNotFoundError
from launchpad.core.etag import conditional_hal_response, hal_response
from launchpad.models.auth import AuthContext
from launchpad.models.session import SessionsDelete, SessionsQuery
from launchpad.models.user import Role
from launchpad.repository import NotFoundError, SessionRepository
from launchpad.routing.registration import route_name
from launchpad.routing.router import Router
from launchpad.services import require_role, require_session_auth
from .dependencies import cache_ttl, get_auth_context, get_router, get_session_repository
from .paging import decode_paging_instruction, fetch_page

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}/sessions", tags=["sessions"])


@router.post("/list", name=route_name("sessions", "get_sessions"), summary="List sessions")
async def get_sessions_endpoint(
    user_id: str,
    request: Request,
    query: Optional[SessionsQuery] = None,
    auth_context: AuthContext = Depends(get_auth_context),
    session_repo: SessionRepository = Depends(get_session_repository),
    route_table: Router = Depends(get_router),
):
    require_role(auth_context.identity, Role.SUPPORT, allow_owner=True, resource_user_id=user_id)

    instruction = decode_paging_instruction(query.paging_instruction if query else None)
    page = await fetch_page(lambda: session_repo.get_sessions(user_id, instruction))

    adapter = SessionCollectionAdapter(user_id, page.items, page.paging_instructions, route_table)
    return conditional_hal_response(
        request, adapter.to_json(), cache_ttl(ENV_SESSION_CACHE_TTL, SESSION_CACHE_TTL_SECONDS)
    )


@router.get("/{session_id}", name=route_name("sessions", "get_session"), summary="Get a session")
async def get_session_endpoint(
    user_id: str,
    session_id: str,
    request: Request,
    auth_context: AuthContext = Depends(get_auth_context),
    session_repo: SessionRepository = Depends(get_session_repository),
    route_table: Router = Depends(get_router),
):
    require_role(auth_context.identity, Role.SUPPORT, allow_owner=True, resource_user_id=user_id)

    try:
        session = await session_repo.get_session(user_id, session_id)
    except NotFoundError as not_found:
        raise HttpNotFoundError(str(not_found))

    collection = SessionCollectionAdapter(user_id, [session], None, route_table)
    body = CollectionItemAdapter(collection, session).to_json()
    return conditional_hal_response(request, body, cache_ttl(ENV_SESSION_CACHE_TTL, SESSION_CACHE_TTL_SECONDS))


@router.post("/delete", name=route_name("sessions", "delete_sessions"), summary="Revoke sessions")
async def delete_sessions_endpoint(
    user_id: str,
    deletion: SessionsDelete,
    auth_context: AuthContext = Depends(get_auth_context),
    session_repo: SessionRepository = Depends(get_session_repository),
    route_table: Router = Depends(get_router),
):
    require_role(auth_context.identity, Role.SUPPORT, allow_owner=True, resource_user_id=user_id)
    require_session_auth(auth_context)

    deleted_count = await session_repo.delete_sessions(user_id, deletion.session_ids)
    logger.info(f"Deleted {deleted_count} sessions for user {user_id}")

    collection = SessionCollectionAdapter(user_id, [], None, route_table)
    adapter = MessageAdapter(
        route_table,
        f"Deleted {deleted_count} sessions for user {user_id}",
        templates={TEMPLATE_COLLECTION: collection.paging_template("View Sessions", None)},
        properties={"deletedCount": deleted_count},
    )
    return hal_response(adapter.to_json())
