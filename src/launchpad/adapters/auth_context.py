"""
Authenticated identity adapters returned by the auth endpoints.
"""

from typing import Any, Dict

from launchpad.hal.models import HalObject, HalTemplate
from launchpad.models.auth import AccessContext, AuthContext
from launchpad.routing.router import Router
from .base import HalResourceAdapter, LinkValue, isoformat, serialize_links, serialize_templates
from .user import UserNavigationMixin, user_properties


class AccessAdapter(HalResourceAdapter):
    """How the caller authenticated; links to the session when there is one."""

    def __init__(self, access: AccessContext, user_id: str, router: Router):
        super().__init__(router)
        self.access = access
        self.user_id = user_id

    @property
    def links(self) -> Dict[str, LinkValue]:
        if self.access.type == "session" and self.access.session_id:
            return self.self_link(
                self.href("sessions", "get_session", user_id=self.user_id, session_id=self.access.session_id)
            )
        return {}

    def to_json(self) -> HalObject:
        body: Dict[str, Any] = {
            "type": self.access.type,
            "description": self.access.description,
            "ipAddress": self.access.ip_address,
            "userAgent": self.access.user_agent,
            "dateLastAccessed": isoformat(self.access.date_last_accessed),
            "dateExpires": isoformat(self.access.date_expires),
        }
        body = {key: value for key, value in body.items() if value is not None}
        body["_links"] = serialize_links(self.links)
        return body


class AuthContextAdapter(UserNavigationMixin, HalResourceAdapter):
    """
    The caller's identity with navigation into their collections.

    ``revoke`` is only offered to session callers; an API key cannot be
    revoked through the auth endpoints.
    """

    def __init__(self, auth_context: AuthContext, router: Router):
        super().__init__(router)
        self.auth_context = auth_context

    @property
    def user_id(self) -> str:
        return self.auth_context.identity.user_id

    @property
    def links(self) -> Dict[str, LinkValue]:
        links: Dict[str, LinkValue] = self.base_links()
        links.update(self.self_link(self.href("users", "get_user", user_id=self.user_id)))
        return links

    @property
    def templates(self) -> Dict[str, HalTemplate]:
        templates: Dict[str, HalTemplate] = {
            "verify": self.create_template("Verify Session", "POST", self.href("auth", "verify")),
        }
        templates.update(self.collection_templates(self.user_id))

        if self.auth_context.is_session_auth:
            templates["revoke"] = self.create_template("Revoke current session", "POST", self.href("auth", "revoke"))

        return templates

    @property
    def embedded(self) -> Dict[str, Any]:
        return {"access": AccessAdapter(self.auth_context.access, self.user_id, self.router).to_json()}

    def to_json(self) -> HalObject:
        body = user_properties(self.auth_context.identity)
        body["_links"] = serialize_links(self.links)
        body["_embedded"] = self.embedded
        body["_templates"] = serialize_templates(self.templates)
        return body
