"""
Authentication service.

Turns a session token or API key into an AuthContext. Federation with an
identity provider only needs a yes/no answer from a TokenVerifier; the
provider's token format is not handled here.
"""

import logging
import uuid
from typing import Iterable, Optional, Tuple

from launchpad.core.constants import AUTH_SCHEME_API_KEY, AUTH_SCHEME_SESSION, DEFAULT_SESSION_TTL_HOURS
from launchpad.models.auth import AccessContext, AuthContext
from launchpad.models.user import User
from launchpad.repository import (
    ApiKeyRepository,
    NotFoundError,
    SessionRepository,
    UserRepository,
    sign_session_token,
)

logger = logging.getLogger(__name__)


def parse_authorization_header(header: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Split an Authorization header into scheme and credential.

    Returns:
        (scheme, credential), or (None, None) when the header is absent or
        uses a scheme other than SessionToken or ApiKey
    """
    if not header:
        return None, None

    scheme, _, credential = header.strip().partition(" ")
    credential = credential.strip()
    if scheme not in (AUTH_SCHEME_SESSION, AUTH_SCHEME_API_KEY) or not credential:
        return None, None
    return scheme, credential


class TokenVerifier:
    """Checks an identity provider access token."""

    def verify(self, access_token: str) -> bool:
        raise NotImplementedError


class StaticTokenVerifier(TokenVerifier):
    """Accepts a fixed set of tokens, configured for development and tests."""

    def __init__(self, allowed_tokens: Iterable[str] = ()):
        self._allowed_tokens = {token for token in allowed_tokens if token}

    def verify(self, access_token: str) -> bool:
        return access_token in self._allowed_tokens


class Authenticator:
    """
    Service for establishing and checking who is calling.

    Sessions are looked up by token signature; API keys by value.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        session_repo: SessionRepository,
        api_key_repo: ApiKeyRepository,
        token_verifier: TokenVerifier,
        session_ttl_hours: int = DEFAULT_SESSION_TTL_HOURS,
    ):
        self.user_repo = user_repo
        self.session_repo = session_repo
        self.api_key_repo = api_key_repo
        self.token_verifier = token_verifier
        self.session_ttl_hours = session_ttl_hours

    async def authenticate(
        self,
        access_token: str,
        session_key: str,
        email: str,
        first_name: str = "",
        last_name: str = "",
        ip_address: str = "",
        user_agent: str = "",
    ) -> Optional[Tuple[AuthContext, str]]:
        """
        Federate an identity provider sign-in into a new session.

        Args:
            access_token: Provider token, checked by the TokenVerifier
            session_key: Client-generated secret half of the session token
            email: Identity the provider vouched for

        Returns:
            (auth context, session token), or None if the token is rejected
        """
        if not self.token_verifier.verify(access_token):
            logger.warning(f"Federation rejected for {email}")
            return None

        user = await self.user_repo.get_by_email(email)
        if user is None:
            user = await self.user_repo.upsert(User(
                user_id=str(uuid.uuid4()),
                email=email,
                first_name=first_name,
                last_name=last_name,
            ))
            logger.info(f"Created user {user.user_id} on first sign-in")

        session_token = f"{session_key}{user.user_id}"
        session = await self.session_repo.create_session(
            user.user_id,
            session_token,
            ip_address=ip_address,
            user_agent=user_agent,
            ttl_hours=self.session_ttl_hours,
        )

        access = AccessContext(
            type="session",
            description="Session",
            ip_address=ip_address,
            user_agent=user_agent,
            session_id=session.session_id,
            date_last_accessed=session.date_last_accessed,
            date_expires=session.date_expires,
        )
        return AuthContext(identity=user, access=access), session_token

    async def verify(
        self,
        session_token: Optional[str] = None,
        api_key: Optional[str] = None,
        ip_address: str = "",
        user_agent: str = "",
    ) -> Optional[AuthContext]:
        """
        Resolve a session token or API key into an AuthContext.

        Returns:
            The context, or None when the credential is unknown or expired
        """
        if session_token:
            return await self._verify_session(session_token, ip_address, user_agent)
        if api_key:
            return await self._verify_api_key(api_key, ip_address, user_agent)
        return None

    async def revoke(self, session_token: str) -> bool:
        """Delete the session behind a token; False if it was already gone."""
        revoked = await self.session_repo.delete_by_signature(sign_session_token(session_token))
        if revoked:
            logger.info("Session revoked")
        return revoked

    async def _verify_session(self, session_token: str, ip_address: str, user_agent: str) -> Optional[AuthContext]:
        session = await self.session_repo.verify_session(sign_session_token(session_token))
        if session is None:
            return None

        user = await self._get_user(session.user_id)
        if user is None:
            return None

        access = AccessContext(
            type="session",
            description="Session",
            ip_address=ip_address,
            user_agent=user_agent,
            session_id=session.session_id,
            date_last_accessed=session.date_last_accessed,
            date_expires=session.date_expires,
        )
        return AuthContext(identity=user, access=access)

    async def _verify_api_key(self, api_key: str, ip_address: str, user_agent: str) -> Optional[AuthContext]:
        record = await self.api_key_repo.get_by_key(api_key)
        if record is None:
            return None

        user = await self._get_user(record.user_id)
        if user is None:
            return None

        access = AccessContext(
            type="apiKey",
            description=f"API Key: {record.label}",
            ip_address=ip_address,
            user_agent=user_agent,
            date_last_accessed=record.date_last_accessed,
        )
        return AuthContext(identity=user, access=access)

    async def _get_user(self, user_id: str) -> Optional[User]:
        try:
            return await self.user_repo.get(user_id)
        except NotFoundError:
            logger.warning(f"Credential refers to missing user {user_id}")
            return None
