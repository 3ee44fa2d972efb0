"""
Authorization checks shared by the controllers.

All checks raise ForbiddenError with a reason the client can show.
"""

from typing import Optional

from launchpad.core.constants import ERROR_SESSION_AUTH_REQUIRED
from launchpad.core.errors import ForbiddenError
from launchpad.models.auth import AuthContext
from launchpad.models.user import Features, Role, User


def has_role(user: User, minimum_role: Role) -> bool:
    return user.role >= minimum_role


def is_resource_owner(user: User, resource_user_id: Optional[str]) -> bool:
    return resource_user_id is not None and user.user_id == resource_user_id


def require_role(
    user: User,
    minimum_role: Role,
    allow_owner: bool = False,
    resource_user_id: Optional[str] = None,
) -> None:
    """
    Require a minimum role, optionally letting the resource owner through.

    Args:
        user: The authenticated user
        minimum_role: Lowest role that may perform the action
        allow_owner: Whether owning the resource is enough
        resource_user_id: Owner of the resource being accessed

    Raises:
        ForbiddenError: If neither the role nor ownership grants access
    """
    allowed = has_role(user, minimum_role)

    if allow_owner and resource_user_id:
        if allowed or is_resource_owner(user, resource_user_id):
            return
        raise ForbiddenError(f"This action requires {minimum_role.label} role or resource ownership")

    if not allowed:
        raise ForbiddenError(f"This action requires {minimum_role.label} role or higher")


def require_features(user: User, required: Features) -> None:
    """Raise ForbiddenError naming every required feature the user lacks."""
    if (user.features & required) == required:
        return

    missing = [name for name in required.names if name not in user.features.names]
    raise ForbiddenError(f"This action requires features: {', '.join(missing)}")


def require_session_auth(auth_context: AuthContext) -> None:
    """Reject requests authenticated by API key."""
    if not auth_context.is_session_auth:
        raise ForbiddenError(ERROR_SESSION_AUTH_REQUIRED)
