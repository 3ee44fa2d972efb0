"""
Helpers for reading HAL documents.

Work on both parsed HalResource instances and plain wire mappings.
"""

from typing import Any, List, Mapping, Optional, Sequence, Union

from .models import HalLink, HalResource, HalTemplate

Resource = Union[HalResource, Mapping[str, Any]]


def _reserved(resource: Resource, key: str) -> Mapping[str, Any]:
    if isinstance(resource, HalResource):
        value = {"_links": resource.links, "_embedded": resource.embedded, "_templates": resource.templates}[key]
    else:
        value = resource.get(key)
    return value or {}


def is_hal_object(value: Any) -> bool:
    """True for a HalResource or a mapping carrying any reserved member."""
    if isinstance(value, HalResource):
        return True
    if not isinstance(value, Mapping):
        return False
    return any(key in value for key in ("_links", "_embedded", "_templates"))


def is_hal_error(value: Any) -> bool:
    if not is_hal_object(value):
        return False
    status = value.get("status")
    return isinstance(status, int) and not isinstance(status, bool) and isinstance(value.get("title"), str)


def get_link_href(resource: Resource, rel: Union[str, Sequence[str]]) -> Optional[str]:
    """
    Return the href of the first relation found.

    Args:
        resource: HAL document
        rel: A relation name or a list of fallbacks tried in order

    Returns:
        The href, or None. Multi-valued relations yield their first link.
    """
    links = _reserved(resource, "_links")
    rels: List[str] = [rel] if isinstance(rel, str) else list(rel)

    for name in rels:
        link = links.get(name)
        if not link:
            continue
        if isinstance(link, list):
            link = link[0]
        if isinstance(link, HalLink):
            return link.href
        return link.get("href")

    return None


def has_link(resource: Resource, rel: Union[str, Sequence[str]]) -> bool:
    return get_link_href(resource, rel) is not None


def get_embedded(resource: Resource, rel: str) -> Any:
    return _reserved(resource, "_embedded").get(rel)


def get_template(resource: Resource, name: str) -> Optional[HalTemplate]:
    template = _reserved(resource, "_templates").get(name)
    if template is None:
        return None
    return HalTemplate.coerce(template)


def has_template(resource: Resource, name: str) -> bool:
    return name in _reserved(resource, "_templates")
