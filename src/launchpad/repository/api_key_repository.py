"""
Repository for API key entities.

Keys are listed newest first and paged by last evaluated key, the way a
key-value store pages a partition.
"""

import asyncio
import logging
import uuid
from typing import Any, Dict, List, Optional

from launchpad.core.constants import DEFAULT_PAGE_LIMIT
from launchpad.models.api_key import ApiKey
from launchpad.models.paging import KeyPaging, PagingInstructions
from launchpad.models.user import utc_now
from .base import AlreadyExistsError, NotFoundError, Paginated, coerce_paging_instruction

logger = logging.getLogger(__name__)


class ApiKeyRepository:
    """Abstract interface for API key repository."""

    async def get_api_keys(
        self, user_id: str, paging_instruction: Optional[Dict[str, Any]] = None
    ) -> Paginated[ApiKey]:
        """
        Get one page of a user's API keys.

        Args:
            user_id: Owner of the keys
            paging_instruction: Decoded KeyPaging mapping, None for the first page

        Returns:
            Keys plus next/previous/current instructions

        Raises:
            InvalidPagingInstructionError: If the instruction is not KeyPaging
        """
        raise NotImplementedError

    async def get_api_key(self, user_id: str, api_key_id: str) -> ApiKey:
        """
        Get one of a user's keys.

        Raises:
            NotFoundError: If the key does not exist or belongs to someone else
        """
        raise NotImplementedError

    async def create_api_key(self, user_id: str, label: str, api_key: str) -> ApiKey:
        raise NotImplementedError

    async def delete_api_keys(self, user_id: str, api_key_ids: List[str]) -> int:
        """Delete the listed keys owned by user_id; returns how many were removed."""
        raise NotImplementedError

    async def get_by_key(self, api_key: str) -> Optional[ApiKey]:
        """Look up a key by its secret value and touch its last access time."""
        raise NotImplementedError


class InMemoryApiKeyRepository(ApiKeyRepository):
    """
    In-memory implementation of API key repository.

    Thread-safe implementation using asyncio.Lock.
    """

    def __init__(self):
        self._api_keys: Dict[str, ApiKey] = {}
        self._key_index: Dict[str, str] = {}
        self._insertion_order: List[str] = []
        self._lock = asyncio.Lock()

    @staticmethod
    def _key_of(api_key: ApiKey) -> Dict[str, str]:
        return {"userId": api_key.user_id, "apiKeyId": api_key.api_key_id}

    async def get_api_keys(
        self, user_id: str, paging_instruction: Optional[Dict[str, Any]] = None
    ) -> Paginated[ApiKey]:
        paging = coerce_paging_instruction(paging_instruction, KeyPaging)
        limit = paging.limit if paging else DEFAULT_PAGE_LIMIT
        start_key = paging.last_evaluated_key if paging else None

        async with self._lock:
            owned = [
                self._api_keys[api_key_id]
                for api_key_id in reversed(self._insertion_order)
                if self._api_keys[api_key_id].user_id == user_id
            ]

        start = 0
        if start_key:
            for position, api_key in enumerate(owned):
                if api_key.api_key_id == start_key.get("apiKeyId"):
                    start = position + 1
                    break

        page = owned[start:start + limit]

        previous_keys = list(paging.previous_keys) if paging else []

        previous = None
        if start_key:
            previous = KeyPaging(
                limit=limit,
                last_evaluated_key=previous_keys[-1] if previous_keys else None,
                previous_keys=previous_keys[:-1],
                scan_index_forward=False,
            )

        next_page = None
        if page and start + limit < len(owned):
            next_page = KeyPaging(
                limit=limit,
                last_evaluated_key=self._key_of(page[-1]),
                previous_keys=previous_keys + [start_key],
                scan_index_forward=False,
            )

        logger.debug(f"Listed {len(page)} API keys for user {user_id}")
        return Paginated[ApiKey](
            items=page,
            paging_instructions=PagingInstructions(next=next_page, previous=previous, current=paging),
        )

    async def get_api_key(self, user_id: str, api_key_id: str) -> ApiKey:
        async with self._lock:
            record = self._api_keys.get(api_key_id)
            if record is None or record.user_id != user_id:
                raise NotFoundError("ApiKey", api_key_id)
            return record

    async def create_api_key(self, user_id: str, label: str, api_key: str) -> ApiKey:
        async with self._lock:
            if api_key in self._key_index:
                raise AlreadyExistsError("ApiKey", self._key_index[api_key])

            now = utc_now()
            record = ApiKey(
                api_key_id=str(uuid.uuid4()),
                user_id=user_id,
                label=label,
                api_key=api_key,
                date_created=now,
                date_last_accessed=now,
            )
            self._api_keys[record.api_key_id] = record
            self._key_index[api_key] = record.api_key_id
            self._insertion_order.append(record.api_key_id)
            return record

    async def delete_api_keys(self, user_id: str, api_key_ids: List[str]) -> int:
        deleted = 0
        async with self._lock:
            for api_key_id in api_key_ids:
                record = self._api_keys.get(api_key_id)
                # Keys owned by someone else are skipped, not reported
                if record is None or record.user_id != user_id:
                    continue
                del self._api_keys[api_key_id]
                del self._key_index[record.api_key]
                self._insertion_order.remove(api_key_id)
                deleted += 1
        return deleted

    async def get_by_key(self, api_key: str) -> Optional[ApiKey]:
        async with self._lock:
            api_key_id = self._key_index.get(api_key)
            if api_key_id is None:
                return None
            record = self._api_keys[api_key_id].model_copy(update={"date_last_accessed": utc_now()})
            self._api_keys[api_key_id] = record
            return record
