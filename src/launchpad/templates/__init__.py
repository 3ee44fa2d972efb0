"""
HAL-FORMS template runtime.

Pure functions a client uses to present a template and turn user intent
into a request body.
"""

from .categorization import TemplateCategory, categorize_template
from .confirmation import ConfirmationConfig, get_confirmation_config
from .execution import (
    EmptySelectionError,
    MissingRequiredFieldError,
    PropertySource,
    TemplateExecutionContext,
    TemplateValidationError,
    build_template_data,
    get_property_source,
)

__all__ = [
    "TemplateCategory",
    "categorize_template",
    "ConfirmationConfig",
    "get_confirmation_config",
    "EmptySelectionError",
    "MissingRequiredFieldError",
    "PropertySource",
    "TemplateExecutionContext",
    "TemplateValidationError",
    "build_template_data",
    "get_property_source",
]
