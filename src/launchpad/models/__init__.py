"""
Launchpad API - Pydantic Models

Domain entities, request bodies and paging instructions.
"""

from .api_key import ApiKey, ApiKeyCreate, ApiKeysDelete, ApiKeysQuery
from .auth import AccessContext, AuthContext, FederateRequest
from .paging import (
    CursorPaging,
    InvalidPagingInstructionError,
    KeyPaging,
    PagingInstructions,
    parse_paging_instruction,
    serialize_paging_instruction,
)
from .session import Session, SessionsDelete, SessionsQuery
from .user import Features, Role, User, UserUpdate

__all__ = [
    "ApiKey",
    "ApiKeyCreate",
    "ApiKeysDelete",
    "ApiKeysQuery",
    "AccessContext",
    "AuthContext",
    "FederateRequest",
    "CursorPaging",
    "InvalidPagingInstructionError",
    "KeyPaging",
    "PagingInstructions",
    "parse_paging_instruction",
    "serialize_paging_instruction",
    "Session",
    "SessionsDelete",
    "SessionsQuery",
    "Features",
    "Role",
    "User",
    "UserUpdate",
]
