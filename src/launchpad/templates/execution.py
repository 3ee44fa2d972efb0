"""
Template execution context.

Builds the request body for a template from the data sources available
at the moment the user acts:

- explicit values (property.value, e.g. hidden cursors)
- UI selections (checked rows, for bulk operations)
- form input (modal forms)
- the current resource (single-item operations)

Building is a pure data transform. It runs, and fails, before any request
is sent.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from launchpad.hal.models import HalResource, HalTemplate, HalTemplateProperty

SELECTION_SUFFIX = "Ids"


class PropertySource(str, Enum):
    """Where a template property's value comes from."""

    VALUE = "value"
    SELECTION = "selection"
    FORM = "form"

    def __str__(self) -> str:
        return self.value


class TemplateValidationError(ValueError):
    """Raised when a request body cannot be built from the context."""

    kind = "TemplateValidation"

    def __init__(self, field_name: str, message: str):
        self.field = field_name
        super().__init__(message)


class MissingRequiredFieldError(TemplateValidationError):
    """A required form property had no value in any source."""

    kind = "MissingRequiredField"

    def __init__(self, field_name: str):
        super().__init__(field_name, f"Required field {field_name} is missing")


class EmptySelectionError(TemplateValidationError):
    """A required selection property had nothing selected."""

    kind = "EmptySelection"

    def __init__(self, field_name: str):
        super().__init__(field_name, f"At least one item must be selected for {field_name}")


@dataclass
class TemplateExecutionContext:
    """
    Everything a single user-triggered execution can draw from.

    Created when the user clicks, selects or submits, and discarded once
    the resulting request settles.
    """

    template: HalTemplate
    form_data: Optional[Dict[str, Any]] = None
    selections: Optional[List[str]] = None
    resource: Optional[Union[HalResource, Mapping[str, Any]]] = None

    def __post_init__(self):
        self.template = HalTemplate.coerce(self.template)

    @property
    def selection_count(self) -> int:
        return len(self.selections or [])


def get_property_source(prop: HalTemplateProperty) -> PropertySource:
    """
    Decide where a property's value comes from.

    1. An explicit value wins for any type, including pre-filled visible fields.
    2. ``array`` properties and names ending in ``Ids`` come from selections.
    3. Everything else comes from form input or the current resource.
    """
    if prop.has_value:
        return PropertySource.VALUE

    if prop.type == "array" or prop.name.endswith(SELECTION_SUFFIX):
        return PropertySource.SELECTION

    return PropertySource.FORM


def build_template_data(context: TemplateExecutionContext) -> Dict[str, Any]:
    """
    Build the request body for a template.

    Properties are visited in declaration order and read-only ones are
    skipped. Form-sourced values are looked up in form_data, then the
    resource, then the property's own value; presence of the key decides,
    not truthiness.

    Args:
        context: The execution context

    Returns:
        Flat mapping of property name to value

    Raises:
        EmptySelectionError: A required selection property has no selections
        MissingRequiredFieldError: A required form property has no value

    Example:
        >>> build_template_data(TemplateExecutionContext(
        ...     template=HalTemplate.coerce({"properties": [
        ...         {"name": "sessionIds", "type": "array", "required": True}]}),
        ...     selections=["id1", "id2"]))
        {'sessionIds': ['id1', 'id2']}
    """
    data: Dict[str, Any] = {}

    for prop in context.template.properties:
        if prop.read_only:
            continue

        source = get_property_source(prop)

        if source is PropertySource.VALUE:
            data[prop.name] = prop.value

        elif source is PropertySource.SELECTION:
            if context.selections:
                data[prop.name] = list(context.selections)
            elif prop.required:
                raise EmptySelectionError(prop.name)

        else:
            form_data = context.form_data or {}
            resource = context.resource

            if prop.name in form_data:
                data[prop.name] = form_data[prop.name]
            elif resource is not None and prop.name in resource:
                data[prop.name] = resource[prop.name]
            elif prop.has_value:
                data[prop.name] = prop.value
            elif prop.required:
                raise MissingRequiredFieldError(prop.name)

    return data
