"""
Paging instruction models.

Each storage backend has its own instruction shape. Clients never look
inside one: the collection adapter serializes it into a hidden template
property and the client posts it back untouched.
"""

import json
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from launchpad.core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT


class InvalidPagingInstructionError(ValueError):
    """Raised when a posted paging instruction cannot be decoded."""
    pass


class CursorPaging(BaseModel):
    """Cursor-style paging (opaque cursor string plus direction)."""

    model_config = ConfigDict(extra="forbid")

    cursor: Optional[str] = None
    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT)
    direction: Optional[Literal["forward", "backward"]] = None


class KeyPaging(BaseModel):
    """Key-based paging (last evaluated key plus scan direction)."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    last_evaluated_key: Optional[Dict[str, Any]] = Field(None, alias="lastEvaluatedKey")
    # Start keys of every earlier page, oldest first; None marks the first page
    previous_keys: List[Optional[Dict[str, Any]]] = Field(default_factory=list, alias="previousKeys")
    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT)
    scan_index_forward: Optional[bool] = Field(None, alias="scanIndexForward")


class PagingInstructions(BaseModel):
    """Instructions for the neighbouring pages of a result. Values are opaque."""

    next: Any = None
    previous: Any = None
    current: Any = None


def dump_paging_instruction(instruction: Any) -> Any:
    """Wire form of an instruction: models by alias without empty members."""
    if isinstance(instruction, BaseModel):
        return instruction.model_dump(by_alias=True, exclude_none=True, mode="json")
    return instruction


def serialize_paging_instruction(instruction: Any) -> str:
    """Encode an instruction for a hidden template property value."""
    return json.dumps(dump_paging_instruction(instruction))


def parse_paging_instruction(raw: Any) -> Optional[Dict[str, Any]]:
    """
    Decode a posted instruction back into a mapping.

    Args:
        raw: JSON string, mapping, model or None

    Returns:
        The instruction as a dict, or None for the first page

    Raises:
        InvalidPagingInstructionError: If the value is not a JSON object
    """
    if raw is None or raw == "":
        return None

    if isinstance(raw, BaseModel):
        return dump_paging_instruction(raw)

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as decode_error:
            raise InvalidPagingInstructionError(f"Paging instruction is not valid JSON: {decode_error}")

    if raw is None:
        return None

    if not isinstance(raw, dict):
        raise InvalidPagingInstructionError("Paging instruction must be a JSON object")

    return raw
