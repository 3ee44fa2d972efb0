"""
Client side of the hypermedia API: transport, HAL-FORMS execution and
the template runner.
"""

from .api_client import ApiClient, ApiClientError
from .hal_forms_client import HalFormsClient, validate_property
from .runner import (
    RunOutcome,
    TemplateDataInvalidError,
    TemplateInFlightError,
    TemplateNotFoundError,
    TemplateRunner,
)

__all__ = [
    "ApiClient",
    "ApiClientError",
    "HalFormsClient",
    "validate_property",
    "RunOutcome",
    "TemplateDataInvalidError",
    "TemplateInFlightError",
    "TemplateNotFoundError",
    "TemplateRunner",
]
