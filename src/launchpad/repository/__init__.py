"""
Repository layer for the hypermedia API.

This module implements the repository pattern for data access. The
in-memory implementations stand in for the storage engines.
"""

from .base import AlreadyExistsError, NotFoundError, Paginated, RepositoryException, coerce_paging_instruction
from .api_key_repository import ApiKeyRepository, InMemoryApiKeyRepository
from .session_repository import InMemorySessionRepository, SessionRepository, sign_session_token
from .user_repository import InMemoryUserRepository, UserRepository

__all__ = [
    "RepositoryException",
    "NotFoundError",
    "AlreadyExistsError",
    "Paginated",
    "coerce_paging_instruction",
    "ApiKeyRepository",
    "InMemoryApiKeyRepository",
    "SessionRepository",
    "InMemorySessionRepository",
    "sign_session_token",
    "UserRepository",
    "InMemoryUserRepository",
]
