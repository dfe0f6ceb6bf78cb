"""Backend error translation for user-facing results.

Backend error codes are implementation details of the identity provider.
They are never shown to users; instead each recognized code maps to a stable
message key, and anything unrecognized becomes the generic failure message of
the operation that was attempted.

Security Features:
- Unknown accounts and wrong passwords share one message
- Raw backend messages and codes are only logged, never returned
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

import structlog

from blueprint.core.exceptions import BackendError
from blueprint.domain.services.authentication.results import GateErrorKind, GateResult
from blueprint.utils.i18n import get_translated_message

logger = structlog.get_logger(__name__)


class GateOperation(str, Enum):
    """Gated operations, each with its own generic failure message."""

    REGISTER = "register"
    LOGIN = "login"
    LOGOUT = "logout"
    PASSWORD_RESET = "password_reset"
    PASSWORD_UPDATE = "password_update"


@dataclass(frozen=True)
class TranslatedError:
    """A recognized backend failure: its gate error kind and message key."""

    error_kind: GateErrorKind
    message_key: str


class BackendErrorTranslator:
    """Maps `BackendError` codes to stable gate results."""

    KNOWN_ERRORS: Dict[str, TranslatedError] = {
        "auth/email-already-in-use": TranslatedError(
            GateErrorKind.EMAIL_IN_USE, "email_already_registered"
        ),
        "auth/weak-password": TranslatedError(GateErrorKind.WEAK_PASSWORD, "password_too_weak"),
        # Unknown account and wrong password are indistinguishable to callers.
        "auth/invalid-credential": TranslatedError(
            GateErrorKind.INVALID_CREDENTIALS, "invalid_email_or_password"
        ),
        "auth/wrong-password": TranslatedError(
            GateErrorKind.INVALID_CREDENTIALS, "invalid_email_or_password"
        ),
        "auth/user-not-found": TranslatedError(
            GateErrorKind.INVALID_CREDENTIALS, "invalid_email_or_password"
        ),
        "auth/too-many-requests": TranslatedError(
            GateErrorKind.TOO_MANY_REQUESTS, "too_many_failed_logins"
        ),
        "auth/requires-recent-login": TranslatedError(
            GateErrorKind.REQUIRES_RECENT_LOGIN, "requires_recent_login"
        ),
    }

    FALLBACK_MESSAGE_KEYS: Dict[GateOperation, str] = {
        GateOperation.REGISTER: "registration_failed",
        GateOperation.LOGIN: "login_failed",
        GateOperation.LOGOUT: "logout_failed",
        GateOperation.PASSWORD_RESET: "password_reset_failed",
        GateOperation.PASSWORD_UPDATE: "password_update_failed",
    }

    def translate(
        self, error: BackendError, operation: GateOperation, language: str = "en"
    ) -> GateResult:
        """Turn a backend failure into a failed `GateResult`.

        Args:
            error: The exception raised by the backend adapter.
            operation: Operation that failed, selecting the fallback message.
            language: Language of the returned message.
        """
        known = self.KNOWN_ERRORS.get(error.code)
        if known is None:
            logger.error(
                "Unrecognized backend failure",
                operation=operation.value,
                error_code=error.code,
                error_message=error.message,
            )
            return GateResult.failure(
                GateErrorKind.BACKEND_FAILURE,
                get_translated_message(self.FALLBACK_MESSAGE_KEYS[operation], language),
            )

        logger.warning(
            "Backend rejected operation",
            operation=operation.value,
            error_code=error.code,
            error_kind=known.error_kind.value,
        )
        return GateResult.failure(
            known.error_kind, get_translated_message(known.message_key, language)
        )
