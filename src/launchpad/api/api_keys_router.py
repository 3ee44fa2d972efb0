"""
API key endpoints.

Listing is a POST so the paging instruction travels in the body rather
than the query string. Creating and deleting keys requires a session;
an API key cannot mint or revoke API keys.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from launchpad.adapters import ApiKeyCollectionAdapter, CollectionItemAdapter, MessageAdapter
from launchpad.core.constants import (
    API_KEY_CACHE_TTL_SECONDS,
    API_KEY_PREFIX_LENGTH,
    ENV_API_KEY_CACHE_TTL,
    SUCCESS_API_KEY_CREATED,
    TEMPLATE_COLLECTION,
)
from launchpad.core.errors import ConflictError
from launchpad.core.errors import NotFoundError as HttpNotFoundError
from launchpad.core.etag import conditional_hal_response, hal_response
from launchpad.models.api_key import ApiKeyCreate, ApiKeysDelete, ApiKeysQuery
from launchpad.models.auth import AuthContext
from launchpad.models.user import Role
from launchpad.repository import AlreadyExistsError, ApiKeyRepository, NotFoundError
from launchpad.routing.registration import route_name
from launchpad.routing.router import Router
from launchpad.services import generate_api_key, require_role, require_session_auth
from .dependencies import cache_ttl, get_api_key_repository, get_auth_context, get_router
from .paging import decode_paging_instruction, fetch_page

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}/api-keys", tags=["api-keys"])


def collection_template(user_id: str, route_table: Router):
    """Navigation back to the first page of the key list."""
    adapter = ApiKeyCollectionAdapter(user_id, [], None, route_table)
    return {TEMPLATE_COLLECTION: adapter.paging_template("View API Keys", None)}


@router.post("/list", name=route_name("api_keys", "get_api_keys"), summary="List API keys")
async def get_api_keys_endpoint(
    user_id: str,
    request: Request,
    query: Optional[ApiKeysQuery] = None,
    auth_context: AuthContext = Depends(get_auth_context),
    api_key_repo: ApiKeyRepository = Depends(get_api_key_repository),
    route_table: Router = Depends(get_router),
):
    require_role(auth_context.identity, Role.ACCOUNT_MANAGER, allow_owner=True, resource_user_id=user_id)

    instruction = decode_paging_instruction(query.paging_instruction if query else None)
    page = await fetch_page(lambda: api_key_repo.get_api_keys(user_id, instruction))

    adapter = ApiKeyCollectionAdapter(user_id, page.items, page.paging_instructions, route_table)
    return conditional_hal_response(
        request, adapter.to_json(), cache_ttl(ENV_API_KEY_CACHE_TTL, API_KEY_CACHE_TTL_SECONDS)
    )


@router.get("/{api_key_id}", name=route_name("api_keys", "get_api_key"), summary="Get an API key")
async def get_api_key_endpoint(
    user_id: str,
    api_key_id: str,
    request: Request,
    auth_context: AuthContext = Depends(get_auth_context),
    api_key_repo: ApiKeyRepository = Depends(get_api_key_repository),
    route_table: Router = Depends(get_router),
):
    require_role(auth_context.identity, Role.ACCOUNT_MANAGER, allow_owner=True, resource_user_id=user_id)

    try:
        api_key = await api_key_repo.get_api_key(user_id, api_key_id)
    except NotFoundError as not_found:
        raise HttpNotFoundError(str(not_found))

    collection = ApiKeyCollectionAdapter(user_id, [api_key], None, route_table)
    body = CollectionItemAdapter(collection, api_key).to_json()
    return conditional_hal_response(request, body, cache_ttl(ENV_API_KEY_CACHE_TTL, API_KEY_CACHE_TTL_SECONDS))


@router.post("/create", name=route_name("api_keys", "create_api_key"), summary="Create an API key")
async def create_api_key_endpoint(
    user_id: str,
    api_key_data: ApiKeyCreate,
    auth_context: AuthContext = Depends(get_auth_context),
    api_key_repo: ApiKeyRepository = Depends(get_api_key_repository),
    route_table: Router = Depends(get_router),
):
    """
    Create a key and show it once in the response.

    The full key is returned together with a template back to the list.
    """
    require_role(auth_context.identity, Role.ACCOUNT_MANAGER, allow_owner=True, resource_user_id=user_id)
    require_session_auth(auth_context)

    try:
        created = await api_key_repo.create_api_key(user_id, api_key_data.label, generate_api_key())
    except AlreadyExistsError as duplicate_error:
        raise ConflictError(str(duplicate_error))

    logger.info(f"API key {created.api_key_id} created for user {user_id}")

    adapter = MessageAdapter(
        route_table,
        SUCCESS_API_KEY_CREATED,
        templates=collection_template(user_id, route_table),
        properties={
            "apiKeyId": created.api_key_id,
            "apiKey": created.api_key,
            "keyPrefix": created.api_key[:API_KEY_PREFIX_LENGTH],
            "label": created.label,
            "dateCreated": created.date_created.isoformat(),
        },
    )
    return hal_response(adapter.to_json(), status_code=status.HTTP_201_CREATED)


@router.post("/delete", name=route_name("api_keys", "delete_api_keys"), summary="Delete API keys")
async def delete_api_keys_endpoint(
    user_id: str,
    deletion: ApiKeysDelete,
    auth_context: AuthContext = Depends(get_auth_context),
    api_key_repo: ApiKeyRepository = Depends(get_api_key_repository),
    route_table: Router = Depends(get_router),
):
    """Delete keys in bulk. Accepts real POST or a DELETE override (``_method``)."""
    require_role(auth_context.identity, Role.ADMIN, allow_owner=True, resource_user_id=user_id)
    require_session_auth(auth_context)

    deleted_count = await api_key_repo.delete_api_keys(user_id, deletion.api_key_ids)
    logger.info(f"Deleted {deleted_count} API keys for user {user_id}")

    adapter = MessageAdapter(
        route_table,
        f"Deleted {deleted_count} API keys for user {user_id}",
        templates=collection_template(user_id, route_table),
        properties={"deletedCount": deleted_count},
    )
    return hal_response(adapter.to_json())
