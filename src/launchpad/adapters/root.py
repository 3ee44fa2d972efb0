"""
API entry point and sitemap adapters.
"""

from typing import Any, Dict, List, Optional

from launchpad.hal.models import HalObject, HalTemplate
from launchpad.models.user import Role, User
from launchpad.routing.router import Router
from .base import HalResourceAdapter, LinkValue, serialize_links, serialize_templates
from .user import UserNavigationMixin


class RootAdapter(UserNavigationMixin, HalResourceAdapter):
    """
    The API root. Anonymous callers are pointed at federation; signed-in
    callers get their collections and session controls.
    """

    def __init__(self, router: Router, user: Optional[User] = None, version: str = "", environment: str = ""):
        super().__init__(router)
        self.user = user
        self.version = version
        self.environment = environment

    @property
    def links(self) -> Dict[str, LinkValue]:
        links: Dict[str, LinkValue] = self.self_link(self.href("root", "index"), title="API Root")
        links["sitemap"] = self.create_link(self.href("sitemap", "get_sitemap"), title="API Navigation")
        if self.user is not None:
            links["user"] = self.create_link(self.href("users", "get_user", user_id=self.user.user_id), title="Profile")
        return links

    @property
    def templates(self) -> Dict[str, HalTemplate]:
        if self.user is None:
            return {
                "auth:federate": self.create_template(
                    "Federate Identity Provider Token", "POST", self.href("auth", "federate")
                ),
            }

        templates = {
            "auth:verify": self.create_template("Verify Session", "POST", self.href("auth", "verify")),
            "auth:revoke": self.create_template("Revoke Session", "POST", self.href("auth", "revoke")),
        }
        templates.update(self.collection_templates(self.user.user_id))
        return templates

    def to_json(self) -> HalObject:
        return {
            "version": self.version,
            "environment": self.environment,
            "authenticated": self.user is not None,
            "_links": serialize_links(self.links),
            "_templates": serialize_templates(self.templates),
        }


class SitemapAdapter(UserNavigationMixin, HalResourceAdapter):
    """
    Role-aware navigation.

    ``_nav`` groups refer to entries of ``_links`` and ``_templates`` by
    key, so a client can render menus without knowing any URL.
    """

    title = "API Sitemap"

    def __init__(self, router: Router, user: Optional[User] = None):
        super().__init__(router)
        self.user = user

    @property
    def nav(self) -> List[Dict[str, Any]]:
        if self.user is None:
            return [
                {"title": "Public", "items": [
                    {"rel": "home", "type": "link"},
                    {"rel": "auth:federate", "type": "template"},
                ]},
            ]

        nav = [
            {"title": "Main Navigation", "items": [
                {"rel": "home", "type": "link"},
                {"rel": "profile", "type": "link"},
                {"rel": "sessions", "type": "template"},
                {"rel": "api-keys", "type": "template"},
            ]},
        ]

        if self.user.role >= Role.ADMIN:
            nav.append({"title": "Administration", "items": [
                {"rel": "health", "type": "link"},
            ]})

        nav.append({"title": "User", "items": [
            {"rel": "logout", "type": "template"},
        ]})
        return nav

    @property
    def links(self) -> Dict[str, LinkValue]:
        links: Dict[str, LinkValue] = self.self_link(self.href("sitemap", "get_sitemap"))
        links["home"] = self.create_link(self.href("root", "index"), title="Home")

        if self.user is not None:
            links["profile"] = self.create_link(
                self.href("users", "get_user", user_id=self.user.user_id), title="Profile"
            )
            if self.user.role >= Role.ADMIN:
                links["health"] = self.create_link(self.href("root", "health"), title="Health")

        return links

    @property
    def templates(self) -> Dict[str, HalTemplate]:
        if self.user is None:
            return {
                "auth:federate": self.create_template("Federate Session", "POST", self.href("auth", "federate")),
            }

        templates = self.collection_templates(self.user.user_id)
        templates["logout"] = self.create_template("Logout", "POST", self.href("auth", "revoke"))
        return templates

    def to_json(self) -> HalObject:
        return {
            "title": self.title,
            "_nav": self.nav,
            "_links": serialize_links(self.links),
            "_templates": serialize_templates(self.templates),
        }
