"""
Authentication context models.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .user import User

AccessType = Literal["session", "apiKey", "unknown"]


class AccessContext(BaseModel):
    """How the current request was authenticated."""

    type: AccessType = "unknown"
    description: Optional[str] = None
    ip_address: str = ""
    user_agent: str = ""
    session_id: Optional[str] = None
    date_last_accessed: Optional[datetime] = None
    date_expires: Optional[datetime] = None


class AuthContext(BaseModel):
    """Authenticated identity plus access details, attached to each protected request."""

    identity: User
    access: AccessContext = Field(default_factory=AccessContext)

    @property
    def is_session_auth(self) -> bool:
        return self.access.type == "session"


class FederateRequest(BaseModel):
    """Request body for exchanging an identity provider token for a session."""

    model_config = ConfigDict(populate_by_name=True)

    session_key: str = Field(alias="sessionKey", min_length=16, description="Client-generated session secret")
    email: str = Field(min_length=3)
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
