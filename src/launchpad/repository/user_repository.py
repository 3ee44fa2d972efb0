"""
Repository for User entities.
"""

import asyncio
from typing import Dict, List, Optional

from launchpad.models.user import User, utc_now
from .base import NotFoundError


class UserRepository:
    """Abstract interface for User repository."""

    async def get(self, user_id: str) -> User:
        raise NotImplementedError

    async def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    async def upsert(self, user: User) -> User:
        raise NotImplementedError

    async def list(self) -> List[User]:
        raise NotImplementedError


class InMemoryUserRepository(UserRepository):
    """
    In-memory implementation of User repository.

    Thread-safe implementation using asyncio.Lock.
    """

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._email_index: Dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def get(self, user_id: str) -> User:
        """Get user by ID."""
        async with self._lock:
            if user_id not in self._users:
                raise NotFoundError("User", user_id)
            return self._users[user_id]

    async def get_by_email(self, email: str) -> Optional[User]:
        async with self._lock:
            user_id = self._email_index.get(email.lower())
            if user_id:
                return self._users[user_id]
            return None

    async def upsert(self, user: User) -> User:
        """Create the user or replace the stored copy."""
        async with self._lock:
            existing = self._users.get(user.user_id)
            if existing is not None:
                del self._email_index[existing.email.lower()]
                user = user.model_copy(update={
                    "date_created": existing.date_created,
                    "date_modified": utc_now(),
                })

            self._users[user.user_id] = user
            self._email_index[user.email.lower()] = user.user_id
            return user

    async def list(self) -> List[User]:
        async with self._lock:
            return sorted(self._users.values(), key=lambda u: u.date_created)
