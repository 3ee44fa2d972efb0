"""
Base class for HAL resource adapters.

An adapter is a pure projection: it takes domain objects and the route
table and returns a fresh HAL document. Every href comes from the
Router; adapters never format URLs themselves.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from launchpad.hal.models import HalLink, HalObject, HalTemplate, HalTemplateProperty
from launchpad.routing.router import Router

LinkValue = Union[HalLink, List[HalLink]]


def isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def serialize_links(links: Optional[Dict[str, LinkValue]]) -> Dict[str, Any]:
    serialized: Dict[str, Any] = {}
    for rel, link in (links or {}).items():
        if isinstance(link, list):
            serialized[rel] = [item.to_dict() for item in link]
        else:
            serialized[rel] = link.to_dict()
    return serialized


def serialize_templates(templates: Optional[Dict[str, HalTemplate]]) -> Dict[str, Any]:
    return {key: template.to_dict() for key, template in (templates or {}).items()}


class HalResourceAdapter(ABC):
    """
    Base adapter. Subclasses provide ``links`` and usually ``templates``
    and ``embedded``, then assemble them in ``to_json``.
    """

    def __init__(self, router: Router):
        self.router = router

    @property
    @abstractmethod
    def links(self) -> Dict[str, LinkValue]:
        pass

    @property
    def embedded(self) -> Optional[Dict[str, Any]]:
        return None

    @property
    def templates(self) -> Optional[Dict[str, HalTemplate]]:
        return None

    def href(self, controller: str, operation: str, **params: str) -> str:
        """Reverse-route an operation; routing errors propagate."""
        return self.router.build_href(controller, operation, params)

    def create_link(self, href: str, **options: Any) -> HalLink:
        return HalLink(href=href, **options)

    def create_template(
        self,
        title: str,
        method: str,
        target: str,
        content_type: Optional[str] = None,
        properties: Optional[List[HalTemplateProperty]] = None,
    ) -> HalTemplate:
        options: Dict[str, Any] = {}
        if content_type is not None:
            options["content_type"] = content_type
        if properties is not None:
            options["properties"] = properties
        return HalTemplate(title=title, method=method, target=target, **options)

    def create_property(self, name: str, **options: Any) -> HalTemplateProperty:
        """Only the options passed here are serialized."""
        return HalTemplateProperty(name=name, **options)

    def self_link(self, href: str, **options: Any) -> Dict[str, HalLink]:
        return {"self": self.create_link(href, **options)}

    def base_links(self) -> Dict[str, HalLink]:
        """Cross-cutting links present on every resource."""
        return {
            "home": self.create_link(self.href("root", "index"), title="API Root"),
            "sitemap": self.create_link(self.href("sitemap", "get_sitemap"), title="API Navigation"),
        }

    @abstractmethod
    def to_json(self) -> HalObject:
        """Serialize to the wire form."""
        pass

