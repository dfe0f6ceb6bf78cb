"""Field validation and input sanitization."""

from .field_schema import FieldSchema, FieldSchemaSet
from .input_sanitizer import InputSanitizer, sanitize_input
from .results import FormValidationResult, ValidationErrorKind, ValidationResult
from .validators import (
    FieldValidator,
    validate_email,
    validate_name,
    validate_password,
    validate_registration_form,
    validate_username,
)

__all__ = [
    "FieldSchema",
    "FieldSchemaSet",
    "FieldValidator",
    "FormValidationResult",
    "InputSanitizer",
    "ValidationErrorKind",
    "ValidationResult",
    "sanitize_input",
    "validate_email",
    "validate_name",
    "validate_password",
    "validate_registration_form",
    "validate_username",
]
