"""
Template categorization.

Decides how a client presents a HAL-FORMS template without any extra
metadata from the API:

- navigation: execute immediately and show the result (pagination, collection access)
- form: collect user input first (create, update, search)
- action: ask for confirmation, then execute (delete)
"""

from enum import Enum
from typing import Any, Mapping, Union

from launchpad.hal.models import HalTemplate

NAVIGATION_METHODS = frozenset({"GET", "POST"})


class TemplateCategory(str, Enum):
    """How a template should be presented."""

    NAVIGATION = "navigation"
    FORM = "form"
    ACTION = "action"

    def __str__(self) -> str:
        return self.value


def categorize_template(key: str, template: Union[HalTemplate, Mapping[str, Any]]) -> TemplateCategory:
    """
    Categorize a template from its method and property visibility.

    Rules, in order:

    1. GET/POST with no visible properties -> navigation. These are
       parameterized reads, e.g. "next page" posted with a hidden cursor.
    2. Any visible property -> form, whatever the method (a DELETE asking
       for a reason is still a form).
    3. Anything else (PUT/PATCH/DELETE/HEAD/OPTIONS or no usable method,
       nothing visible) -> action.

    Args:
        key: Template key from _templates (not used by the rules)
        template: The template, parsed or as its wire mapping

    Returns:
        The template category

    Example:
        >>> categorize_template("next", {"method": "POST",
        ...     "properties": [{"name": "cursor", "type": "hidden", "value": "abc"}]})
        <TemplateCategory.NAVIGATION: 'navigation'>
        >>> categorize_template("delete", {"method": "DELETE"})
        <TemplateCategory.ACTION: 'action'>
    """
    template = HalTemplate.coerce(template)
    method = template.normalized_method
    visible_count = len(template.visible_properties)

    if method in NAVIGATION_METHODS and visible_count == 0:
        return TemplateCategory.NAVIGATION

    if visible_count > 0:
        return TemplateCategory.FORM

    return TemplateCategory.ACTION
