"""
Repository for Session entities.

Sessions are stored by the SHA-256 signature of their token, never the
token itself. Listing is newest first with cursor paging in either
direction.
"""

import asyncio
import hashlib
import logging
import uuid
from datetime import timedelta
from typing import Any, Dict, List, Optional

from launchpad.core.constants import DEFAULT_PAGE_LIMIT, DEFAULT_SESSION_TTL_HOURS
from launchpad.models.paging import CursorPaging, PagingInstructions
from launchpad.models.session import Session
from launchpad.models.user import utc_now
from .base import AlreadyExistsError, NotFoundError, Paginated, coerce_paging_instruction

logger = logging.getLogger(__name__)


def sign_session_token(session_token: str) -> str:
    """Signature under which a session token is stored and looked up."""
    return hashlib.sha256(session_token.encode("utf-8")).hexdigest()


class SessionRepository:
    """Abstract interface for Session repository."""

    async def get_sessions(
        self, user_id: str, paging_instruction: Optional[Dict[str, Any]] = None
    ) -> Paginated[Session]:
        raise NotImplementedError

    async def get_session(self, user_id: str, session_id: str) -> Session:
        raise NotImplementedError

    async def create_session(
        self,
        user_id: str,
        session_token: str,
        ip_address: str = "",
        user_agent: str = "",
        ttl_hours: int = DEFAULT_SESSION_TTL_HOURS,
    ) -> Session:
        raise NotImplementedError

    async def delete_sessions(self, user_id: str, session_ids: List[str]) -> int:
        raise NotImplementedError

    async def verify_session(self, session_signature: str) -> Optional[Session]:
        raise NotImplementedError

    async def delete_by_signature(self, session_signature: str) -> bool:
        raise NotImplementedError


class InMemorySessionRepository(SessionRepository):
    """
    In-memory implementation of Session repository.

    Thread-safe implementation using asyncio.Lock.
    """

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._signature_index: Dict[str, str] = {}
        self._insertion_order: List[str] = []
        self._lock = asyncio.Lock()

    async def get_sessions(
        self, user_id: str, paging_instruction: Optional[Dict[str, Any]] = None
    ) -> Paginated[Session]:
        """
        Get one page of a user's sessions.

        A forward cursor starts after the named session, a backward cursor
        ends before it.

        Raises:
            InvalidPagingInstructionError: If the instruction is not CursorPaging
        """
        paging = coerce_paging_instruction(paging_instruction, CursorPaging)
        limit = paging.limit if paging else DEFAULT_PAGE_LIMIT

        async with self._lock:
            owned = [
                self._sessions[session_id]
                for session_id in reversed(self._insertion_order)
                if self._sessions[session_id].user_id == user_id
            ]

        ids = [session.session_id for session in owned]
        start, end = 0, limit

        if paging and paging.cursor in ids:
            position = ids.index(paging.cursor)
            if paging.direction == "backward":
                start, end = max(0, position - limit), position
            else:
                start, end = position + 1, position + 1 + limit

        page = owned[start:end]

        next_page = None
        if page and end < len(owned):
            next_page = CursorPaging(cursor=page[-1].session_id, limit=limit, direction="forward")

        previous = None
        if page and start > 0:
            previous = CursorPaging(cursor=page[0].session_id, limit=limit, direction="backward")

        logger.debug(f"Listed {len(page)} sessions for user {user_id}")
        return Paginated[Session](
            items=page,
            paging_instructions=PagingInstructions(next=next_page, previous=previous, current=paging),
        )

    async def get_session(self, user_id: str, session_id: str) -> Session:
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None or session.user_id != user_id:
                raise NotFoundError("Session", session_id)
            return session

    async def create_session(
        self,
        user_id: str,
        session_token: str,
        ip_address: str = "",
        user_agent: str = "",
        ttl_hours: int = DEFAULT_SESSION_TTL_HOURS,
    ) -> Session:
        signature = sign_session_token(session_token)
        now = utc_now()

        async with self._lock:
            if signature in self._signature_index:
                raise AlreadyExistsError("Session", self._signature_index[signature])

            session = Session(
                session_id=str(uuid.uuid4()),
                user_id=user_id,
                session_signature=signature,
                ip_address=ip_address,
                user_agent=user_agent,
                date_created=now,
                date_expires=now + timedelta(hours=ttl_hours),
                date_last_accessed=now,
            )
            self._sessions[session.session_id] = session
            self._signature_index[signature] = session.session_id
            self._insertion_order.append(session.session_id)
            return session

    async def delete_sessions(self, user_id: str, session_ids: List[str]) -> int:
        deleted = 0
        async with self._lock:
            for session_id in session_ids:
                session = self._sessions.get(session_id)
                if session is None or session.user_id != user_id:
                    continue
                self._remove(session)
                deleted += 1
        return deleted

    async def verify_session(self, session_signature: str) -> Optional[Session]:
        """Return the live session for a signature, touching its last access time."""
        async with self._lock:
            session_id = self._signature_index.get(session_signature)
            if session_id is None:
                return None

            session = self._sessions[session_id]
            now = utc_now()
            if session.date_expires <= now:
                logger.info(f"Session {session_id} expired at {session.date_expires.isoformat()}")
                self._remove(session)
                return None

            session = session.model_copy(update={"date_last_accessed": now})
            self._sessions[session_id] = session
            return session

    async def delete_by_signature(self, session_signature: str) -> bool:
        async with self._lock:
            session_id = self._signature_index.get(session_signature)
            if session_id is None:
                return False
            self._remove(self._sessions[session_id])
            return True

    def _remove(self, session: Session) -> None:
        # Caller holds the lock
        del self._sessions[session.session_id]
        del self._signature_index[session.session_signature]
        self._insertion_order.remove(session.session_id)
