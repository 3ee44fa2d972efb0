"""
API routers for the hypermedia endpoints.
"""

from .api_keys_router import router as api_keys_router
from .auth_router import router as auth_router
from .root_router import router as root_router
from .sessions_router import router as sessions_router
from .users_router import router as users_router

__all__ = [
    "api_keys_router",
    "auth_router",
    "root_router",
    "sessions_router",
    "users_router",
]
