"""
HAL collection of a user's sessions.

Sessions are created by signing in, so this collection has no create
template.
"""

from typing import Any, Dict

from launchpad.models.session import Session
from .base import isoformat
from .collection import CollectionAdapter


class SessionCollectionAdapter(CollectionAdapter[Session]):
    controller = "sessions"
    list_operation = "get_sessions"
    item_operation = "get_session"
    delete_operation = "delete_sessions"
    collection_key = "sessions"
    id_property = "sessionIds"
    item_id_param = "session_id"
    title = "Sessions"
    item_title = "Session"

    def item_id(self, item: Session) -> str:
        return item.session_id

    def item_properties(self, item: Session) -> Dict[str, Any]:
        return {
            "sessionId": item.session_id,
            "userId": item.user_id,
            "ipAddress": item.ip_address,
            "userAgent": item.user_agent,
            "dateCreated": isoformat(item.date_created),
            "dateExpires": isoformat(item.date_expires),
            "dateLastAccessed": isoformat(item.date_last_accessed),
        }
