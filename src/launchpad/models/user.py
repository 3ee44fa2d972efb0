"""
User-related Pydantic models.

Role is ordered (Base < Support < AccountManager < Admin) and features are
bit flags, matching how they are stored.
"""

from datetime import datetime, timezone
from enum import IntEnum, IntFlag
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Role(IntEnum):
    """User roles, compared by rank."""

    BASE = 0
    SUPPORT = 1
    ACCOUNT_MANAGER = 2
    ADMIN = 3

    @property
    def label(self) -> str:
        return {
            Role.BASE: "Base",
            Role.SUPPORT: "Support",
            Role.ACCOUNT_MANAGER: "AccountManager",
            Role.ADMIN: "Admin",
        }[self]


class Features(IntFlag):
    """Feature bit flags enabled per user."""

    NONE = 0
    CONTACTS = 1
    CAMPAIGNS = 2
    LINKS = 4
    APPS = 8

    @property
    def names(self) -> List[str]:
        return [
            flag.name.title()
            for flag in (Features.CONTACTS, Features.CAMPAIGNS, Features.LINKS, Features.APPS)
            if flag in self
        ]

    @classmethod
    def from_names(cls, names: List[str]) -> "Features":
        """
        Combine feature names into flags.

        Raises:
            ValueError: If a name is not a known feature
        """
        features = cls.NONE
        for name in names:
            try:
                features |= cls[name.upper()]
            except KeyError:
                raise ValueError(f"Unknown feature: {name}")
        return features


class User(BaseModel):
    """Complete user model."""

    user_id: str = Field(description="Unique identifier for the user")
    email: str = Field(description="Sign-in email address")
    first_name: str = Field("", description="Given name")
    last_name: str = Field("", description="Family name")
    role: Role = Field(default=Role.BASE, description="Authorization role")
    features: Features = Field(default=Features.NONE, description="Enabled feature flags")
    date_created: datetime = Field(default_factory=utc_now)
    date_modified: datetime = Field(default_factory=utc_now)



class UserUpdate(BaseModel):
    """Request body for editing a user. Omitted fields keep their value."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(None, alias="firstName", max_length=100)
    last_name: Optional[str] = Field(None, alias="lastName", max_length=100)
    role: Optional[Role] = None
    features: Optional[List[str]] = Field(None, description="Feature names, e.g. ['Contacts', 'Links']")
