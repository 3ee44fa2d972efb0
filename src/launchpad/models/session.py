"""
Session models.
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .user import utc_now


class Session(BaseModel):
    """A sign-in session. The signature is a hash of the session token."""

    session_id: str = Field(description="Unique identifier for the session")
    user_id: str = Field(description="Owner of the session")
    session_signature: str = Field(description="SHA-256 of the session token")
    ip_address: str = Field("", description="Client address at sign-in")
    user_agent: str = Field("", description="Client user agent at sign-in")
    date_created: datetime = Field(default_factory=utc_now)
    date_expires: datetime
    date_last_accessed: datetime = Field(default_factory=utc_now)


class SessionsDelete(BaseModel):
    """Request body for revoking sessions in bulk."""

    model_config = ConfigDict(populate_by_name=True)

    session_ids: List[str] = Field(alias="sessionIds", min_length=1)


class SessionsQuery(BaseModel):
    """Request body for listing sessions."""

    model_config = ConfigDict(populate_by_name=True)

    paging_instruction: Optional[Union[str, dict]] = Field(None, alias="pagingInstruction")
