"""
Service layer for the hypermedia API.

Authentication, authorization checks and API key generation.
"""

from .api_key_generator import generate_api_key
from .authentication import Authenticator, StaticTokenVerifier, TokenVerifier, parse_authorization_header
from .authorization import has_role, is_resource_owner, require_features, require_role, require_session_auth

__all__ = [
    "generate_api_key",
    "Authenticator",
    "StaticTokenVerifier",
    "TokenVerifier",
    "parse_authorization_header",
    "has_role",
    "is_resource_owner",
    "require_features",
    "require_role",
    "require_session_auth",
]
