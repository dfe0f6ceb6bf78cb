"""Field validators for the registration and sign-in forms.

Every validator is pure: it never mutates its input and never raises for bad
input. Failures come back as a `ValidationResult` carrying a translated,
user-presentable message and a `ValidationErrorKind`.

Check order per field is fixed so that a value with several problems always
reports the same one:

- username, password: type, too short, too long, characters
- email: type, format, too long
- name: type, then trimmed length, then characters
"""

from typing import Any, Mapping, Optional

import structlog

from blueprint.core.config.settings import settings
from blueprint.domain.validation.field_schema import FieldSchema, FieldSchemaSet
from blueprint.domain.validation.results import (
    FormValidationResult,
    ValidationErrorKind,
    ValidationResult,
)
from blueprint.utils.i18n import get_translated_message

logger = structlog.get_logger(__name__)


class FieldValidator:
    """Validates individual fields and whole registration forms.

    Args:
        schemas: Length bounds and character whitelists per field. Defaults to
            the built-in schemas.
    """

    def __init__(self, schemas: Optional[FieldSchemaSet] = None):
        self._schemas = schemas if schemas is not None else FieldSchemaSet.default()

    @property
    def schemas(self) -> FieldSchemaSet:
        return self._schemas

    def _message(self, key: str, language: str, **params: Any) -> str:
        return get_translated_message(key, language).format(**params)

    def _label(self, key: str, language: str) -> str:
        return get_translated_message(key, language)

    def _check_length(
        self, value: str, schema: FieldSchema, label: str, language: str
    ) -> Optional[ValidationResult]:
        if schema.is_too_short(value):
            return ValidationResult.failure(
                ValidationErrorKind.TOO_SHORT,
                self._message(
                    "field_too_short", language, field_name=label, min_length=schema.min_length
                ),
            )
        if schema.is_too_long(value):
            return ValidationResult.failure(
                ValidationErrorKind.TOO_LONG,
                self._message(
                    "field_too_long", language, field_name=label, max_length=schema.max_length
                ),
            )
        return None

    def _invalid_type(self, label: str, language: str) -> ValidationResult:
        return ValidationResult.failure(
            ValidationErrorKind.INVALID_TYPE,
            self._message("field_must_be_string", language, field_name=label),
        )

    def validate_username(self, value: Any, language: str = "en") -> ValidationResult:
        """Validate a username: 3-20 characters of letters and underscores."""
        label = self._label("label_username", language)
        if not isinstance(value, str):
            return self._invalid_type(label, language)

        schema = self._schemas.username
        length_failure = self._check_length(value, schema, label, language)
        if length_failure is not None:
            return length_failure

        if not schema.matches(value):
            return ValidationResult.failure(
                ValidationErrorKind.INVALID_CHARACTERS,
                self._message("username_invalid_characters", language),
            )
        return ValidationResult.success()

    def validate_password(self, value: Any, language: str = "en") -> ValidationResult:
        """Validate a password against length bounds and the allowed character set.

        There is no composition rule: any mix of whitelisted characters of a
        valid length passes.
        """
        label = self._label("label_password", language)
        if not isinstance(value, str):
            return self._invalid_type(label, language)

        schema = self._schemas.password
        length_failure = self._check_length(value, schema, label, language)
        if length_failure is not None:
            return length_failure

        if not schema.matches(value):
            return ValidationResult.failure(
                ValidationErrorKind.INVALID_CHARACTERS,
                self._message("password_invalid_characters", language),
            )
        return ValidationResult.success()

    def validate_email(self, value: Any, language: str = "en") -> ValidationResult:
        """Validate an email address.

        The format check runs before the length check, so an over-long but
        malformed address reports INVALID_FORMAT.
        """
        if not isinstance(value, str):
            return self._invalid_type(self._label("label_email", language), language)

        schema = self._schemas.email
        if not schema.matches(value):
            return ValidationResult.failure(
                ValidationErrorKind.INVALID_FORMAT,
                self._message("email_invalid_format", language),
            )
        if schema.is_too_long(value):
            return ValidationResult.failure(
                ValidationErrorKind.TOO_LONG,
                self._message("email_too_long", language),
            )
        return ValidationResult.success()

    def validate_name(
        self, value: Any, field_label: Optional[str] = None, language: str = "en"
    ) -> ValidationResult:
        """Validate a person name after trimming surrounding whitespace.

        Args:
            value: Candidate name.
            field_label: Label used in messages, e.g. "First name". Defaults to
                the translated generic "Name" label.
            language: Language for the error message.
        """
        label = field_label or self._label("label_name", language)
        if not isinstance(value, str):
            return self._invalid_type(label, language)

        trimmed = value.strip()
        schema = self._schemas.name
        length_failure = self._check_length(trimmed, schema, label, language)
        if length_failure is not None:
            return length_failure

        if not schema.matches(trimmed):
            return ValidationResult.failure(
                ValidationErrorKind.INVALID_CHARACTERS,
                self._message("name_invalid_characters", language, field_name=label),
            )
        return ValidationResult.success()

    def validate_registration_form(
        self, fields: Mapping[str, Any], language: str = "en"
    ) -> FormValidationResult:
        """Validate every registration field and collect all failures.

        Validation does not stop at the first failing field. Missing keys are
        treated as None and fail with INVALID_TYPE.

        Args:
            fields: Mapping with first_name, last_name, username, email,
                password and confirm_password.
            language: Language for error messages.

        Returns:
            FormValidationResult: Errors and kinds keyed by field name.
        """
        password = fields.get("password")
        checks = (
            (
                "first_name",
                self.validate_name(
                    fields.get("first_name"), self._label("label_first_name", language), language
                ),
            ),
            (
                "last_name",
                self.validate_name(
                    fields.get("last_name"), self._label("label_last_name", language), language
                ),
            ),
            ("username", self.validate_username(fields.get("username"), language)),
            ("email", self.validate_email(fields.get("email"), language)),
            ("password", self.validate_password(password, language)),
        )

        errors = {}
        kinds = {}
        for field_name, result in checks:
            if not result.is_valid:
                errors[field_name] = result.error
                kinds[field_name] = result.kind

        if fields.get("confirm_password") != password:
            errors["confirm_password"] = self._message("passwords_do_not_match", language)
            kinds["confirm_password"] = ValidationErrorKind.PASSWORD_MISMATCH

        if errors:
            logger.debug("Registration form rejected", fields=list(errors))
        return FormValidationResult(errors=errors, kinds=kinds)


default_validator = FieldValidator(FieldSchemaSet.from_settings(settings))

validate_username = default_validator.validate_username
validate_password = default_validator.validate_password
validate_email = default_validator.validate_email
validate_name = default_validator.validate_name
validate_registration_form = default_validator.validate_registration_form
