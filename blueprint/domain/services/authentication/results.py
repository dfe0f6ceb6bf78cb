"""Results returned by the authentication gate.

Every gated operation returns a `GateResult` instead of raising, so callers
branch on `error_kind` and show `message` directly.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, Mapping, Optional, TypeVar

from blueprint.domain.validation.results import ValidationErrorKind

T = TypeVar("T")


class GateErrorKind(str, Enum):
    """Every reason a gated operation can fail."""

    # Validation
    INVALID_TYPE = "invalid_type"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    INVALID_CHARACTERS = "invalid_characters"
    INVALID_FORMAT = "invalid_format"
    PASSWORD_MISMATCH = "password_mismatch"

    # Client-side rate limiter
    RATE_LIMITED = "rate_limited"

    # Backend
    EMAIL_IN_USE = "email_in_use"
    WEAK_PASSWORD = "weak_password"
    INVALID_CREDENTIALS = "invalid_credentials"
    TOO_MANY_REQUESTS = "too_many_requests"
    REQUIRES_RECENT_LOGIN = "requires_recent_login"
    USERNAME_TAKEN = "username_taken"
    NOT_SIGNED_IN = "not_signed_in"
    BACKEND_FAILURE = "backend_failure"

    @classmethod
    def from_validation(cls, kind: ValidationErrorKind) -> "GateErrorKind":
        return cls(kind.value)


@dataclass(frozen=True)
class GateResult(Generic[T]):
    """Tagged outcome of a gated operation.

    Attributes:
        ok: Whether the operation succeeded.
        value: Operation payload on success (profile, account, ...).
        error_kind: Failure reason; None on success.
        message: User-presentable failure message; None on success.
        field_errors: Per-field messages when a form failed validation.
        retry_after_seconds: Advisory wait when rate limited.
    """

    ok: bool
    value: Optional[T] = None
    error_kind: Optional[GateErrorKind] = None
    message: Optional[str] = None
    field_errors: Mapping[str, str] = field(default_factory=dict)
    retry_after_seconds: Optional[int] = None

    def __post_init__(self):
        if self.ok and self.error_kind is not None:
            raise ValueError("A successful result cannot carry an error kind")
        if not self.ok and (self.error_kind is None or self.message is None):
            raise ValueError("A failed result must carry an error kind and a message")
        object.__setattr__(self, "field_errors", MappingProxyType(dict(self.field_errors)))

    @classmethod
    def success(cls, value: Any = None) -> "GateResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(
        cls,
        error_kind: GateErrorKind,
        message: str,
        field_errors: Optional[Mapping[str, str]] = None,
        retry_after_seconds: Optional[int] = None,
    ) -> "GateResult":
        return cls(
            ok=False,
            error_kind=error_kind,
            message=message,
            field_errors=field_errors or {},
            retry_after_seconds=retry_after_seconds,
        )
