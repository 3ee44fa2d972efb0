"""
User profile adapter.
"""

from typing import Any, Dict

from launchpad.core.constants import APPLICATION_JSON, PAGING_INSTRUCTION_PROPERTY
from launchpad.hal.models import HalObject, HalTemplate, PropertyOption
from launchpad.models.user import Features, Role, User
from launchpad.routing.router import Router
from .base import HalResourceAdapter, LinkValue, isoformat, serialize_links, serialize_templates

FEATURE_OPTIONS = [
    PropertyOption(value=flag.name.title(), prompt=flag.name.title())
    for flag in (Features.CONTACTS, Features.CAMPAIGNS, Features.LINKS, Features.APPS)
]

ROLE_OPTIONS = [PropertyOption(value=int(role), prompt=role.label) for role in Role]


def user_properties(user: User) -> Dict[str, Any]:
    return {
        "userId": user.user_id,
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "role": int(user.role),
        "roleName": user.role.label,
        "features": user.features.names,
        "dateCreated": isoformat(user.date_created),
        "dateModified": isoformat(user.date_modified),
    }


class UserNavigationMixin:
    """Navigation templates into a user's collections."""

    def collection_templates(self, user_id: str) -> Dict[str, HalTemplate]:
        return {
            "sessions": self.navigation_template("Sessions", self.href("sessions", "get_sessions", user_id=user_id)),
            "api-keys": self.navigation_template("API Keys", self.href("api_keys", "get_api_keys", user_id=user_id)),
        }

    def navigation_template(self, title: str, target: str) -> HalTemplate:
        return self.create_template(
            title,
            "POST",
            target,
            content_type=APPLICATION_JSON,
            properties=[
                self.create_property(PAGING_INSTRUCTION_PROPERTY, prompt="Paging Instruction", type="hidden"),
            ],
        )


class UserAdapter(UserNavigationMixin, HalResourceAdapter):
    """
    A user profile as seen by ``current_user``.

    The edit template is offered to the user themself and to admins.
    Role and features are read-only unless an admin edits someone else
    (features stay editable for an admin editing themself).
    """

    def __init__(self, user: User, current_user: User, router: Router):
        super().__init__(router)
        self.user = user
        self.current_user = current_user

    @property
    def is_self_edit(self) -> bool:
        return self.current_user.user_id == self.user.user_id

    @property
    def is_admin(self) -> bool:
        return self.current_user.role >= Role.ADMIN

    def can_edit(self) -> bool:
        return self.is_self_edit or self.is_admin

    @property
    def links(self) -> Dict[str, LinkValue]:
        full_name = f"{self.user.first_name} {self.user.last_name}".strip()
        links: Dict[str, LinkValue] = self.base_links()
        links.update(self.self_link(
            self.href("users", "get_user", user_id=self.user.user_id),
            title=full_name or self.user.email,
        ))
        return links

    def edit_template(self) -> HalTemplate:
        properties = [
            self.create_property(
                "firstName", prompt="First Name", type="text", required=True,
                max_length=100, value=self.user.first_name,
            ),
            self.create_property(
                "lastName", prompt="Last Name", type="text", required=True,
                max_length=100, value=self.user.last_name,
            ),
            self.create_property(
                "role", prompt="User Role", type="select", required=True,
                options=ROLE_OPTIONS, value=int(self.user.role),
                read_only=not self.is_admin or self.is_self_edit,
            ),
            self.create_property(
                "features", prompt="Features", type="select", required=False,
                options=FEATURE_OPTIONS, value=self.user.features.names,
                read_only=not self.is_admin,
            ),
        ]
        return self.create_template(
            "Edit Profile" if self.is_self_edit else "Edit User",
            "PUT",
            self.href("users", "update_user", user_id=self.user.user_id),
            content_type=APPLICATION_JSON,
            properties=properties,
        )

    @property
    def templates(self) -> Dict[str, HalTemplate]:
        templates = self.collection_templates(self.user.user_id)
        if self.can_edit():
            templates["edit"] = self.edit_template()
        return templates

    def to_json(self) -> HalObject:
        body = user_properties(self.user)
        body["_links"] = serialize_links(self.links)
        body["_templates"] = serialize_templates(self.templates)
        return body
