"""User profile records stored alongside each account."""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .account import Account


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class UserProfile(BaseModel):
    """Profile record written after a successful registration.

    The username is stored lower-cased so that uniqueness checks are
    case-insensitive. Names are expected to arrive already sanitized.

    Attributes:
        first_name: Given name.
        last_name: Family name.
        username: Unique handle, lower-cased.
        email: Account email, stored as entered.
        created_at: ISO-8601 UTC creation timestamp.
        subscription_status: Plan the user is on; new users start on "free".
    """

    model_config = ConfigDict(frozen=True)

    first_name: str
    last_name: str
    username: str
    email: str
    created_at: str = Field(default_factory=utc_now_iso)
    subscription_status: str = "free"

    @field_validator("username")
    @classmethod
    def lowercase_username(cls, v: str) -> str:
        return v.lower()

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the plain mapping stored by the profile repository."""
        return self.model_dump()

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "UserProfile":
        """Rebuild a profile from a stored record.

        Raises:
            pydantic.ValidationError: If required fields are missing or malformed.
        """
        return cls.model_validate(dict(record))


class SignedInUser(BaseModel):
    """The signed-in account together with its profile, when it could be read."""

    model_config = ConfigDict(frozen=True)

    account: Account
    profile: Optional[UserProfile] = None

    @property
    def has_profile(self) -> bool:
        return self.profile is not None
