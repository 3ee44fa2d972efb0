"""
Paginated collection adapter.

Renders a page of domain items as a HAL collection:

- ``_embedded[<collection key>]``: items, each with a self link and a
  ``delete`` template
- ``_links``: self plus home and sitemap
- ``_templates``: ``self``, ``default`` (create, when the collection
  supports it), ``bulk-delete`` and, when a neighbouring page exists,
  ``next`` / ``prev``
- ``count`` and ``paging``

Paging instructions are carried as the JSON-encoded ``value`` of a hidden
``pagingInstruction`` property. Clients post the value back unchanged.
"""

from abc import abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

from launchpad.core.constants import (
    APPLICATION_JSON,
    LINK_NEXT,
    LINK_PREVIOUS,
    PAGING_INSTRUCTION_PROPERTY,
    TEMPLATE_BULK_DELETE,
    TEMPLATE_COLLECTION,
    TEMPLATE_DEFAULT,
    TEMPLATE_DELETE,
    TEMPLATE_NEXT,
    TEMPLATE_PREV,
    TEMPLATE_SELF,
)
from launchpad.hal.models import HalObject, HalTemplate, HalTemplateProperty
from launchpad.models.paging import PagingInstructions, dump_paging_instruction, serialize_paging_instruction
from launchpad.routing.router import Router
from .base import HalResourceAdapter, LinkValue, serialize_links, serialize_templates

T = TypeVar("T")


class CollectionAdapter(HalResourceAdapter, Generic[T]):
    """Shared rendering for the per-user collections."""

    controller: str
    list_operation: str
    item_operation: str
    delete_operation: str
    collection_key: str
    id_property: str
    item_id_param: str
    title: str
    item_title: str

    def __init__(self, user_id: str, items: List[T], paging: Optional[PagingInstructions], router: Router):
        super().__init__(router)
        self.user_id = user_id
        self.items = list(items)
        self.paging = paging or PagingInstructions()

    @abstractmethod
    def item_id(self, item: T) -> str:
        pass

    @abstractmethod
    def item_properties(self, item: T) -> Dict[str, Any]:
        """Wire fields of one item, without reserved members."""
        pass

    def create_template_for_collection(self) -> Optional[HalTemplate]:
        """The ``default`` template; None for collections without create."""
        return None

    @property
    def list_href(self) -> str:
        return self.href(self.controller, self.list_operation, user_id=self.user_id)

    @property
    def delete_href(self) -> str:
        return self.href(self.controller, self.delete_operation, user_id=self.user_id)

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def links(self) -> Dict[str, LinkValue]:
        links: Dict[str, LinkValue] = {"self": self.create_link(self.list_href, title=self.title)}
        links.update(self.base_links())

        # Bare list hrefs; the paging instruction lives on the next/prev templates
        if self.paging.next is not None:
            links[LINK_NEXT] = self.create_link(self.list_href, title="Next Page")
        if self.paging.previous is not None:
            links[LINK_PREVIOUS] = self.create_link(self.list_href, title="Previous Page")
        return links

    def paging_property(self, instruction: Any) -> HalTemplateProperty:
        if instruction is None:
            return self.create_property(PAGING_INSTRUCTION_PROPERTY, type="hidden", required=False)
        return self.create_property(
            PAGING_INSTRUCTION_PROPERTY,
            type="hidden",
            required=False,
            value=serialize_paging_instruction(instruction),
        )

    def paging_template(self, title: str, instruction: Any) -> HalTemplate:
        return self.create_template(
            title,
            "POST",
            self.list_href,
            content_type=APPLICATION_JSON,
            properties=[self.paging_property(instruction)],
        )

    @property
    def templates(self) -> Dict[str, HalTemplate]:
        templates: Dict[str, HalTemplate] = {
            TEMPLATE_SELF: self.paging_template(self.title, self.paging.current),
        }

        create_template = self.create_template_for_collection()
        if create_template is not None:
            templates[TEMPLATE_DEFAULT] = create_template

        templates[TEMPLATE_BULK_DELETE] = self.create_template(
            f"Delete Selected {self.title}",
            "DELETE",
            self.delete_href,
            content_type=APPLICATION_JSON,
            properties=[
                self.create_property(self.id_property, type="array", required=True, prompt=f"Selected {self.title}"),
            ],
        )

        if self.paging.next is not None:
            templates[TEMPLATE_NEXT] = self.paging_template("Next Page", self.paging.next)
        if self.paging.previous is not None:
            templates[TEMPLATE_PREV] = self.paging_template("Previous Page", self.paging.previous)

        return templates

    def item_to_json(self, item: T) -> HalObject:
        item_id = self.item_id(item)
        body = self.item_properties(item)
        body["_links"] = serialize_links({
            "self": self.create_link(
                self.href(self.controller, self.item_operation, user_id=self.user_id, **{self.item_id_param: item_id})
            ),
        })
        body["_templates"] = serialize_templates({
            TEMPLATE_DELETE: self.create_template(
                f"Delete {self.item_title}",
                "DELETE",
                self.delete_href,
                content_type=APPLICATION_JSON,
                properties=[self.create_property(self.id_property, type="hidden", value=[item_id])],
            ),
        })
        return body

    @property
    def embedded(self) -> Dict[str, Any]:
        return {self.collection_key: [self.item_to_json(item) for item in self.items]}

    def paging_to_json(self) -> Dict[str, Any]:
        return {
            name: dump_paging_instruction(instruction)
            for name, instruction in (
                ("next", self.paging.next),
                ("previous", self.paging.previous),
                ("current", self.paging.current),
            )
            if instruction is not None
        }

    def to_json(self) -> HalObject:
        return {
            "count": self.count,
            "paging": self.paging_to_json(),
            "_links": serialize_links(self.links),
            "_embedded": self.embedded,
            "_templates": serialize_templates(self.templates),
        }


class CollectionItemAdapter(HalResourceAdapter):
    """A single collection member, rendered the way its collection embeds it."""

    def __init__(self, collection: CollectionAdapter, item: Any):
        super().__init__(collection.router)
        self.collection = collection
        self.item = item

    @property
    def links(self) -> Dict[str, LinkValue]:
        return self.base_links()

    @property
    def templates(self) -> Dict[str, HalTemplate]:
        return {TEMPLATE_COLLECTION: self.collection.paging_template(f"View {self.collection.title}", None)}

    def to_json(self) -> HalObject:
        body = self.collection.item_to_json(self.item)
        body["_links"].update(serialize_links(self.links))
        body["_templates"].update(serialize_templates(self.templates))
        return body
