"""
User profile endpoints.

Account managers may read any profile and admins may edit any profile;
everyone may read and edit their own. Role and features are admin-only
fields even on a self edit.
"""

import logging

from fastapi import APIRouter, Depends, Request

from launchpad.adapters import UserAdapter
from launchpad.core.constants import ENV_USER_CACHE_TTL, ERROR_USER_NOT_FOUND, USER_CACHE_TTL_SECONDS
from launchpad.core.errors import NotFoundError as HttpNotFoundError
from launchpad.core.errors import ValidationError
from launchpad.core.etag import conditional_hal_response, hal_response
from launchpad.models.auth import AuthContext
from launchpad.models.user import Features, Role, User, UserUpdate
from launchpad.repository import NotFoundError, UserRepository
from launchpad.routing.registration import route_name
from launchpad.routing.router import Router
from launchpad.services import require_role
from .dependencies import cache_ttl, get_auth_context, get_router, get_user_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


async def load_user(user_repo: UserRepository, user_id: str) -> User:
    try:
        return await user_repo.get(user_id)
    except NotFoundError:
        raise HttpNotFoundError(f"{ERROR_USER_NOT_FOUND}: {user_id}")


@router.get("/{user_id}", name=route_name("users", "get_user"), summary="Get a user profile")
async def get_user_endpoint(
    user_id: str,
    request: Request,
    auth_context: AuthContext = Depends(get_auth_context),
    user_repo: UserRepository = Depends(get_user_repository),
    route_table: Router = Depends(get_router),
):
    current_user = auth_context.identity
    require_role(current_user, Role.ACCOUNT_MANAGER, allow_owner=True, resource_user_id=user_id)

    user = await load_user(user_repo, user_id)
    body = UserAdapter(user, current_user, route_table).to_json()
    return conditional_hal_response(request, body, cache_ttl(ENV_USER_CACHE_TTL, USER_CACHE_TTL_SECONDS))


@router.post("/{user_id}", name=route_name("users", "update_user"), summary="Update a user profile")
async def update_user_endpoint(
    user_id: str,
    update: UserUpdate,
    auth_context: AuthContext = Depends(get_auth_context),
    user_repo: UserRepository = Depends(get_user_repository),
    route_table: Router = Depends(get_router),
):
    """
    Update a profile. Accepts real POST or a PUT override (``_method``).

    Omitted fields keep their stored value.
    """
    current_user = auth_context.identity
    require_role(current_user, Role.ADMIN, allow_owner=True, resource_user_id=user_id)

    existing = await load_user(user_repo, user_id)

    if update.role is not None or update.features is not None:
        require_role(current_user, Role.ADMIN)

    features = existing.features
    if update.features is not None:
        try:
            features = Features.from_names(update.features)
        except ValueError as feature_error:
            raise ValidationError(str(feature_error), [{"field": "features", "message": str(feature_error)}])

    updated = await user_repo.upsert(existing.model_copy(update={
        "first_name": update.first_name if update.first_name is not None else existing.first_name,
        "last_name": update.last_name if update.last_name is not None else existing.last_name,
        "role": update.role if update.role is not None else existing.role,
        "features": features,
    }))
    logger.info(f"User {user_id} updated by {current_user.user_id}")

    return hal_response(UserAdapter(updated, current_user, route_table).to_json())
