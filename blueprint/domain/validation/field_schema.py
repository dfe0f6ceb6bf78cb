"""Field schema value objects.

A `FieldSchema` describes what a well-formed value of one form field looks
like: its length bounds and a whitelist pattern for the whole value. Matching
is whitelist-based so unexpected input, including look-alike unicode, fails
closed instead of slipping past a blacklist.

Design Principles:
- Immutability: schemas are frozen after construction
- Validation: bounds are checked at construction time
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from blueprint.core.config.validation import ValidationSettings


USERNAME_PATTERN = re.compile(r"[A-Za-z_]+")
PASSWORD_PATTERN = re.compile(r"[A-Za-z0-9!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]+")
EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
# Latin-1 letters only: the multiplication and division signs sit inside
# the accented block and are excluded.
NAME_PATTERN = re.compile(r"[A-Za-z\u00c0-\u00d6\u00d8-\u00f6\u00f8-\u00ff ]+")


@dataclass(frozen=True, slots=True)
class FieldSchema:
    """Immutable description of one validated field.

    Business Rules:
    - Both bounds are positive integers
    - min_length never exceeds max_length
    - The pattern must match the entire value

    Attributes:
        min_length: Smallest accepted length.
        max_length: Largest accepted length.
        pattern: Compiled whitelist pattern applied with `fullmatch`.
    """

    min_length: int
    max_length: int
    pattern: re.Pattern

    def __post_init__(self):
        """Validate bounds at construction time"""
        for bound in (self.min_length, self.max_length):
            if isinstance(bound, bool) or not isinstance(bound, int) or bound <= 0:
                raise ValueError("Schema bounds must be positive integers")
        if self.min_length > self.max_length:
            raise ValueError("min_length cannot exceed max_length")

    def is_too_short(self, value: str) -> bool:
        return len(value) < self.min_length

    def is_too_long(self, value: str) -> bool:
        return len(value) > self.max_length

    def matches(self, value: str) -> bool:
        """Check that every character of the value is whitelisted."""
        return self.pattern.fullmatch(value) is not None


@dataclass(frozen=True, slots=True)
class FieldSchemaSet:
    """The schemas for every field the registration and sign-in forms collect."""

    username: FieldSchema
    password: FieldSchema
    email: FieldSchema
    name: FieldSchema

    DEFAULT_USERNAME: ClassVar[FieldSchema] = FieldSchema(3, 20, USERNAME_PATTERN)
    DEFAULT_PASSWORD: ClassVar[FieldSchema] = FieldSchema(8, 20, PASSWORD_PATTERN)
    DEFAULT_EMAIL: ClassVar[FieldSchema] = FieldSchema(1, 254, EMAIL_PATTERN)
    DEFAULT_NAME: ClassVar[FieldSchema] = FieldSchema(2, 20, NAME_PATTERN)

    @classmethod
    def default(cls) -> FieldSchemaSet:
        return cls(
            username=cls.DEFAULT_USERNAME,
            password=cls.DEFAULT_PASSWORD,
            email=cls.DEFAULT_EMAIL,
            name=cls.DEFAULT_NAME,
        )

    @classmethod
    def from_settings(cls, settings: ValidationSettings) -> FieldSchemaSet:
        """Build schemas whose bounds come from configuration.

        Character whitelists are not configurable and always use the
        module-level patterns.
        """
        return cls(
            username=FieldSchema(
                settings.USERNAME_MIN_LENGTH, settings.USERNAME_MAX_LENGTH, USERNAME_PATTERN
            ),
            password=FieldSchema(
                settings.PASSWORD_MIN_LENGTH, settings.PASSWORD_MAX_LENGTH, PASSWORD_PATTERN
            ),
            email=FieldSchema(
                settings.EMAIL_MIN_LENGTH, settings.EMAIL_MAX_LENGTH, EMAIL_PATTERN
            ),
            name=FieldSchema(settings.NAME_MIN_LENGTH, settings.NAME_MAX_LENGTH, NAME_PATTERN),
        )
