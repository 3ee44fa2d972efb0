"""
Confirmation dialog configuration for action templates.

The dialog text depends only on the template method and how many items
are selected. DELETE gets destructive styling.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union

from launchpad.hal.models import HalTemplate

from .execution import TemplateExecutionContext

DEFAULT_TITLE = "Confirm Action"
UNTITLED_MESSAGE = "Are you sure you want to continue?"


@dataclass(frozen=True)
class ConfirmationConfig:
    title: str
    message: str
    confirm_label: str = "Confirm"
    cancel_label: str = "Cancel"
    variant: str = "default"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "message": self.message,
            "confirmLabel": self.confirm_label,
            "cancelLabel": self.cancel_label,
            "variant": self.variant,
        }


def get_confirmation_config(
    template: Union[HalTemplate, Mapping[str, Any]],
    context: TemplateExecutionContext,
) -> ConfirmationConfig:
    """
    Describe the confirm/cancel dialog for executing a template.

    The method is compared to "DELETE" exactly as sent by the server;
    categorization, by contrast, uppercases the method first.

    Args:
        template: The template being confirmed
        context: Execution context (read for the selection count)

    Returns:
        Dialog title, message, button labels and visual variant

    Example:
        Bulk delete with three selections gives
        "Are you sure you want to delete 3 items? This action cannot be undone."
    """
    template = HalTemplate.coerce(template)
    is_delete = template.method == "DELETE"
    title = template.title or DEFAULT_TITLE

    count = context.selection_count
    if count > 0:
        noun = "item" if count == 1 else "items"
        if is_delete:
            message = f"Are you sure you want to delete {count} {noun}? This action cannot be undone."
        else:
            message = f"Apply this action to {count} {noun}?"
    elif is_delete:
        message = "Are you sure you want to delete this item? This action cannot be undone."
    elif template.title:
        message = f"Are you sure you want to {template.title}?"
    else:
        message = UNTITLED_MESSAGE

    return ConfirmationConfig(
        title=title,
        message=message,
        confirm_label="Delete" if is_delete else "Confirm",
        cancel_label="Cancel",
        variant="destructive" if is_delete else "default",
    )
