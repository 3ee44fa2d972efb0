"""
HAL / HAL-FORMS resource model shared by server adapters and the client.
"""

from .models import (
    HTTP_METHODS,
    RESERVED_KEYS,
    HalLink,
    HalObject,
    HalResource,
    HalTemplate,
    HalTemplateProperty,
    PropertyOption,
)
from .utils import (
    get_embedded,
    get_link_href,
    get_template,
    has_link,
    has_template,
    is_hal_error,
    is_hal_object,
)

__all__ = [
    "HTTP_METHODS",
    "RESERVED_KEYS",
    "HalLink",
    "HalObject",
    "HalResource",
    "HalTemplate",
    "HalTemplateProperty",
    "PropertyOption",
    "get_embedded",
    "get_link_href",
    "get_template",
    "has_link",
    "has_template",
    "is_hal_error",
    "is_hal_object",
]
