"""Validation result value objects.

Validators never raise for bad input. They return one of these immutable
results so callers can branch on the failure kind instead of catching
exceptions.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class ValidationErrorKind(str, Enum):
    """Why a value failed validation."""

    INVALID_TYPE = "invalid_type"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    INVALID_CHARACTERS = "invalid_characters"
    INVALID_FORMAT = "invalid_format"
    PASSWORD_MISMATCH = "password_mismatch"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating a single field.

    Invariant: `error` and `kind` are both None exactly when `is_valid` is true.

    Attributes:
        is_valid: Whether the value passed.
        error: User-presentable message describing the failure.
        kind: Machine-readable failure kind.
    """

    is_valid: bool
    error: Optional[str] = None
    kind: Optional[ValidationErrorKind] = None

    def __post_init__(self):
        if self.is_valid and (self.error is not None or self.kind is not None):
            raise ValueError("A valid result cannot carry an error")
        if not self.is_valid and (self.error is None or self.kind is None):
            raise ValueError("An invalid result must carry an error and a kind")

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def failure(cls, kind: ValidationErrorKind, error: str) -> "ValidationResult":
        return cls(is_valid=False, error=error, kind=kind)


@dataclass(frozen=True)
class FormValidationResult:
    """Outcome of validating a whole form.

    Invariant: `is_valid` is true exactly when `errors` is empty. A field is
    present in `errors` (and `kinds`) only if its own validation failed.
    Fields keep the order in which they were validated.
    """

    errors: Mapping[str, str] = field(default_factory=dict)
    kinds: Mapping[str, ValidationErrorKind] = field(default_factory=dict)

    def __post_init__(self):
        if set(self.errors) != set(self.kinds):
            raise ValueError("errors and kinds must describe the same fields")
        object.__setattr__(self, "errors", MappingProxyType(dict(self.errors)))
        object.__setattr__(self, "kinds", MappingProxyType(dict(self.kinds)))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def first_error(self) -> Optional[str]:
        """Message of the first failing field, or None when the form is valid."""
        return next(iter(self.errors.values()), None)
