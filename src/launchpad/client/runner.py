"""
Template runner: the request-scoped execution loop a UI drives.

categorize -> confirm (actions, or anything acting on a selection) ->
build -> execute -> refresh.

One template runs at a time. Navigation results replace the current
resource; any other execution is followed by a forced reload of the
current resource so the view never shows a cached, pre-mutation body.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from launchpad.hal.models import HalTemplate
from launchpad.hal.utils import get_template
from launchpad.templates import (
    ConfirmationConfig,
    TemplateCategory,
    TemplateExecutionContext,
    build_template_data,
    categorize_template,
    get_confirmation_config,
)
from .hal_forms_client import HalFormsClient

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[ConfirmationConfig], bool]


class TemplateInFlightError(RuntimeError):
    """A template is already executing on this runner."""

    def __init__(self, executing: str):
        self.executing = executing
        super().__init__(f"Template {executing!r} is still executing")


class TemplateNotFoundError(LookupError):
    pass


class TemplateDataInvalidError(ValueError):
    """Client-side validation rejected the built request body."""

    def __init__(self, errors: List[Dict[str, str]]):
        self.errors = errors
        super().__init__("; ".join(error["message"] for error in errors))


@dataclass
class RunOutcome:
    key: str
    category: TemplateCategory
    executed: bool
    result: Optional[Dict[str, Any]] = None
    confirmation: Optional[ConfirmationConfig] = None


@dataclass
class _Source:
    """How to reload the current resource."""

    url: Optional[str] = None
    template: Optional[HalTemplate] = None
    data: Optional[Dict[str, Any]] = None


class TemplateRunner:
    """
    Drives templates of one current resource.

    Args:
        client: HAL-FORMS client
        confirm: Asked before actions and selection-based executions;
            returning False cancels. When omitted everything is confirmed.
    """

    def __init__(self, client: HalFormsClient, confirm: Optional[ConfirmCallback] = None):
        self.client = client
        self.confirm = confirm
        self.resource: Optional[Dict[str, Any]] = None
        self.executing_template: Optional[str] = None
        self._source: Optional[_Source] = None

    def open(self, url: str) -> Dict[str, Any]:
        """Make the resource at ``url`` current."""
        self._source = _Source(url=url)
        self.resource = self.client.fetch(url)
        return self.resource

    def refresh(self) -> Dict[str, Any]:
        """Reload the current resource, bypassing the ETag cache."""
        if self._source is None:
            raise RuntimeError("No resource is open")

        if self._source.template is not None:
            self.resource = self.client.execute_template(
                self._source.template, self._source.data or {}, cacheable=True, force_refresh=True
            )
        else:
            self.resource = self.client.fetch(self._source.url, force_refresh=True)
        return self.resource

    def run(
        self,
        key: str,
        form_data: Optional[Dict[str, Any]] = None,
        selections: Optional[List[str]] = None,
    ) -> RunOutcome:
        """
        Execute the current resource's template ``key``.

        Raises:
            TemplateInFlightError: Another template is still executing
            TemplateNotFoundError: The current resource has no such template
            TemplateValidationError: The body could not be built
            TemplateDataInvalidError: The body breaks a property constraint
            ApiClientError: The request failed
        """
        if self.executing_template is not None:
            raise TemplateInFlightError(self.executing_template)

        template = get_template(self.resource or {}, key)
        if template is None:
            raise TemplateNotFoundError(f"Resource has no template {key!r}")

        self.executing_template = key
        try:
            return self._execute(key, template, form_data, selections)
        finally:
            self.executing_template = None

    def _execute(
        self,
        key: str,
        template: HalTemplate,
        form_data: Optional[Dict[str, Any]],
        selections: Optional[List[str]],
    ) -> RunOutcome:
        category = categorize_template(key, template)
        context = TemplateExecutionContext(
            template=template,
            form_data=form_data,
            selections=selections,
            resource=self.resource,
        )

        confirmation = None
        if category is TemplateCategory.ACTION or context.selection_count > 0:
            confirmation = get_confirmation_config(template, context)
            if self.confirm is not None and not self.confirm(confirmation):
                logger.debug(f"Template {key!r} cancelled")
                return RunOutcome(key=key, category=category, executed=False, confirmation=confirmation)

        data = build_template_data(context)
        errors = self.client.validate_template_data(template, data)
        if errors:
            raise TemplateDataInvalidError(errors)

        is_navigation = category is TemplateCategory.NAVIGATION
        result = self.client.execute_template(template, data, cacheable=is_navigation)

        if is_navigation:
            self._source = _Source(template=template, data=data)
            self.resource = result
        else:
            self.refresh()

        return RunOutcome(key=key, category=category, executed=True, result=result, confirmation=confirmation)
