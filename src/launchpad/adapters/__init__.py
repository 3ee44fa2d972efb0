"""
HAL adapters: project domain objects into hypermedia documents.
"""

from .api_key_collection import ApiKeyCollectionAdapter
from .auth_context import AccessAdapter, AuthContextAdapter
from .base import HalResourceAdapter, serialize_links, serialize_templates
from .collection import CollectionAdapter, CollectionItemAdapter
from .message import MessageAdapter
from .root import RootAdapter, SitemapAdapter
from .session_collection import SessionCollectionAdapter
from .user import UserAdapter

__all__ = [
    "ApiKeyCollectionAdapter",
    "AccessAdapter",
    "AuthContextAdapter",
    "HalResourceAdapter",
    "serialize_links",
    "serialize_templates",
    "CollectionAdapter",
    "CollectionItemAdapter",
    "MessageAdapter",
    "RootAdapter",
    "SitemapAdapter",
    "SessionCollectionAdapter",
    "UserAdapter",
]
