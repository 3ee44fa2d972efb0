"""
HAL-FORMS client.

Fetches HAL resources and executes templates against their targets.
Browsers can only send GET and POST from a form, so DELETE and PUT
templates are sent as POST carrying ``_method``; the server routes those
operations as POST.
"""

import logging
import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
from urllib.parse import urlparse

from launchpad.core.constants import APPLICATION_JSON, HAL_JSON
from launchpad.hal.models import HalTemplate, HalTemplateProperty
from .api_client import ApiClient, ApiClientError

logger = logging.getLogger(__name__)

METHOD_OVERRIDE_FIELD = "_method"
OVERRIDDEN_METHODS = frozenset({"DELETE", "PUT"})
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

FieldError = Dict[str, str]


def is_valid_url(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def validate_property(prop: HalTemplateProperty, value: Any) -> List[FieldError]:
    """Check one value against its property's constraints."""
    errors: List[FieldError] = []
    label = prop.prompt or prop.name
    missing = value is None or value == ""

    if prop.required and missing:
        return [{"field": prop.name, "message": f"{label} is required"}]
    if missing:
        return errors

    field_type = prop.type or "text"

    if field_type == "number":
        number = _as_number(value)
        if number is None:
            return [{"field": prop.name, "message": f"{label} must be a number"}]
        if prop.min is not None and number < float(prop.min):
            errors.append({"field": prop.name, "message": f"{label} must be at least {prop.min}"})
        if prop.max is not None and number > float(prop.max):
            errors.append({"field": prop.name, "message": f"{label} must be at most {prop.max}"})

    if field_type == "email" and not EMAIL_PATTERN.match(str(value)):
        errors.append({"field": prop.name, "message": f"{label} must be a valid email address"})

    if field_type == "url" and not is_valid_url(str(value)):
        errors.append({"field": prop.name, "message": f"{label} must be a valid URL"})

    if isinstance(value, str):
        if prop.min_length is not None and len(value) < prop.min_length:
            errors.append({"field": prop.name, "message": f"{label} must be at least {prop.min_length} characters"})
        if prop.max_length is not None and len(value) > prop.max_length:
            errors.append({"field": prop.name, "message": f"{label} must be at most {prop.max_length} characters"})
        if prop.regex and not re.search(prop.regex, value):
            errors.append({"field": prop.name, "message": f"{label} has an invalid format"})

    return errors


class HalFormsClient:
    """
    Client for hypermedia resources and their templates.

    Args:
        api_client: Transport used for every request
        on_auth_error: Called before a 401 is re-raised, e.g. to send the
            user back to sign-in
    """

    def __init__(self, api_client: ApiClient, on_auth_error: Optional[Callable[[], None]] = None):
        self.api_client = api_client
        self.on_auth_error = on_auth_error

    def _send(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        try:
            return self.api_client.request(method, url, **kwargs)
        except ApiClientError as client_error:
            if client_error.status == 401 and self.on_auth_error is not None:
                self.on_auth_error()
            raise

    def fetch(self, url: str, headers: Optional[Dict[str, str]] = None, force_refresh: bool = False) -> Dict[str, Any]:
        return self._send("GET", url, headers={"Accept": HAL_JSON, **(headers or {})}, force_refresh=force_refresh)

    def get(self, url: str) -> Dict[str, Any]:
        return self.fetch(url)

    def post(self, url: str, data: Any = None) -> Dict[str, Any]:
        return self._send("POST", url, json_body=data, headers={"Accept": HAL_JSON})

    def put(self, url: str, data: Any = None) -> Dict[str, Any]:
        return self._send("PUT", url, json_body=data, headers={"Accept": HAL_JSON})

    def patch(self, url: str, data: Any = None) -> Dict[str, Any]:
        return self._send("PATCH", url, json_body=data, headers={"Accept": HAL_JSON})

    def delete(self, url: str) -> Dict[str, Any]:
        return self._send("DELETE", url, headers={"Accept": HAL_JSON})

    def execute_template(
        self,
        template: Union[HalTemplate, Mapping[str, Any]],
        data: Dict[str, Any],
        cacheable: bool = False,
        force_refresh: bool = False,
    ) -> Dict[str, Any]:
        """
        Submit data to a template's target.

        Args:
            template: Template to execute
            data: Request body, usually from build_template_data. Always sent
                as JSON, the only body the API accepts
            cacheable: Use the ETag cache (navigation templates)
            force_refresh: Bypass a cached ETag

        Returns:
            The decoded HAL response

        Raises:
            ValueError: If the template has no target
            ApiClientError: If the request fails
        """
        template = HalTemplate.coerce(template)
        if not template.target:
            raise ValueError(f"Template {template.title!r} has no target")

        method = (template.method or "GET").upper()
        body = dict(data)
        if method in OVERRIDDEN_METHODS:
            body[METHOD_OVERRIDE_FIELD] = method.lower()
            method = "POST"

        logger.debug(f"Executing template {template.title!r}: {method} {template.target}")

        return self._send(
            method,
            template.target,
            json_body=body,
            headers={"Accept": HAL_JSON, "Content-Type": APPLICATION_JSON},
            cacheable=cacheable,
            force_refresh=force_refresh,
        )

    def validate_template_data(
        self,
        template: Union[HalTemplate, Mapping[str, Any]],
        data: Mapping[str, Any],
    ) -> List[FieldError]:
        """
        Validate form data against the template's property constraints.

        Returns:
            {field, message} pairs; empty when the data is valid
        """
        template = HalTemplate.coerce(template)
        errors: List[FieldError] = []
        for prop in template.properties:
            errors.extend(validate_property(prop, data.get(prop.name)))
        return errors
