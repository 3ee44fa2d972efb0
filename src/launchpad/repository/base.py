"""
Base repository types and exceptions.

Repositories own storage and paging. Each one accepts the paging
instruction a client posted back and validates it against its own
instruction variant before using it.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from launchpad.models.paging import InvalidPagingInstructionError, PagingInstructions


# Generic type for domain models
T = TypeVar("T")
P = TypeVar("P", bound=BaseModel)


class RepositoryException(Exception):
    """Base exception for repository operations."""
    pass


class NotFoundError(RepositoryException):
    """Raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class AlreadyExistsError(RepositoryException):
    """Raised when attempting to create an entity that already exists."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} already exists")


class Paginated(BaseModel, Generic[T]):
    """One page of results plus the instructions for its neighbours."""

    items: List[T] = Field(default_factory=list)
    paging_instructions: PagingInstructions = Field(default_factory=PagingInstructions)


def coerce_paging_instruction(
    instruction: Optional[Dict[str, Any]], variant: Type[P]
) -> Optional[P]:
    """
    Validate a decoded instruction against a repository's own variant.

    Args:
        instruction: Mapping decoded from the client, or None for page one
        variant: CursorPaging or KeyPaging

    Returns:
        The typed instruction, or None

    Raises:
        InvalidPagingInstructionError: If the mapping belongs to another variant
    """
    if instruction is None:
        return None
    if isinstance(instruction, variant):
        return instruction

    try:
        return variant.model_validate(instruction)
    except PydanticValidationError as validation_error:
        raise InvalidPagingInstructionError(
            f"Paging instruction is not a valid {variant.__name__}: "
            f"{validation_error.error_count()} error(s)"
        )
