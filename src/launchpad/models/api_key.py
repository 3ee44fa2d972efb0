"""
API key models.

The full key is only ever shown to its owner; it cannot be derived again
from anything stored elsewhere.
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .user import utc_now


class ApiKey(BaseModel):
    """Complete API key model."""

    api_key_id: str = Field(description="Unique identifier for the key record")
    user_id: str = Field(description="Owner of the key")
    label: str = Field(description="Human-readable label")
    api_key: str = Field(description="The secret key value")
    date_created: datetime = Field(default_factory=utc_now)
    date_last_accessed: datetime = Field(default_factory=utc_now)


class ApiKeyCreate(BaseModel):
    """Request body for creating an API key."""

    label: str = Field(min_length=1, max_length=255, description="Label shown in the key list")


class ApiKeysDelete(BaseModel):
    """Request body for revoking API keys in bulk."""

    model_config = ConfigDict(populate_by_name=True)

    api_key_ids: List[str] = Field(alias="apiKeyIds", min_length=1)


class ApiKeysQuery(BaseModel):
    """Request body for listing API keys; the instruction is opaque to clients."""

    model_config = ConfigDict(populate_by_name=True)

    paging_instruction: Optional[Union[str, dict]] = Field(None, alias="pagingInstruction")
