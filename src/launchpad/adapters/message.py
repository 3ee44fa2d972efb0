"""
Action response adapter.

Mutations answer with a short message plus whatever templates let the
client carry on (typically a way back to the collection it changed).
"""

from typing import Any, Dict, Optional

from launchpad.hal.models import HalLink, HalObject, HalTemplate
from launchpad.routing.router import Router
from .base import HalResourceAdapter, LinkValue, serialize_links, serialize_templates


class MessageAdapter(HalResourceAdapter):
    """
    Message response with optional extra properties.

    Base links are included for resource messages (those with a self
    href) unless ``include_base_links`` says otherwise.
    """

    def __init__(
        self,
        router: Router,
        message: str,
        self_href: Optional[str] = None,
        links: Optional[Dict[str, HalLink]] = None,
        templates: Optional[Dict[str, HalTemplate]] = None,
        properties: Optional[Dict[str, Any]] = None,
        include_base_links: Optional[bool] = None,
    ):
        super().__init__(router)
        self.message = message
        self.self_href = self_href
        self.extra_links = links or {}
        self.extra_templates = templates
        self.properties = properties or {}
        self.include_base_links = include_base_links if include_base_links is not None else bool(self_href)

    @property
    def links(self) -> Dict[str, LinkValue]:
        links: Dict[str, LinkValue] = {}
        if self.self_href:
            links.update(self.self_link(self.self_href))
        links.update(self.extra_links)
        if self.include_base_links:
            links.update(self.base_links())
        return links

    @property
    def templates(self) -> Optional[Dict[str, HalTemplate]]:
        return self.extra_templates

    def to_json(self) -> HalObject:
        body: HalObject = {"message": self.message}
        for key, value in self.properties.items():
            if key.startswith("_"):
                raise ValueError(f"Property name {key} collides with a reserved HAL member")
            body[key] = value

        body["_links"] = serialize_links(self.links)
        if self.extra_templates is not None:
            body["_templates"] = serialize_templates(self.extra_templates)
        return body
