"""
Paging helpers shared by the collection endpoints.
"""

from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from launchpad.core.constants import PAGING_INSTRUCTION_PROPERTY
from launchpad.core.errors import ValidationError
from launchpad.models.paging import InvalidPagingInstructionError, parse_paging_instruction

T = TypeVar("T")


def decode_paging_instruction(raw: Any) -> Optional[Dict[str, Any]]:
    """
    Decode the posted pagingInstruction value.

    Raises:
        ValidationError: If the value is not a JSON object
    """
    try:
        return parse_paging_instruction(raw)
    except InvalidPagingInstructionError as paging_error:
        raise ValidationError(
            str(paging_error),
            [{"field": PAGING_INSTRUCTION_PROPERTY, "message": str(paging_error)}],
        )


async def fetch_page(fetch: Callable[[], Awaitable[T]]) -> T:
    """Run a repository page query, turning a wrong instruction variant into 400."""
    try:
        return await fetch()
    except InvalidPagingInstructionError as paging_error:
        raise ValidationError(
            str(paging_error),
            [{"field": PAGING_INSTRUCTION_PROPERTY, "message": str(paging_error)}],
        )
