from __future__ import annotations

"""Centralized, structured exception hierarchy for Blueprint.

Validation failures and rate-limit denials are routine outcomes and are
returned as result values, never raised. Exceptions are reserved for the seam
with the identity/data backend: implementations of the backend interfaces
raise the `BackendError` subclasses below, and the gate service translates
them into stable, user-presentable results.

Each exception carries a machine-readable `code` for programmatic handling and
a human-readable `message` for logging.
"""

from typing import Final

__all__: Final = [
    "BlueprintError",
    "BackendError",
    "EmailInUseError",
    "WeakPasswordError",
    "InvalidCredentialsError",
    "TooManyRequestsError",
    "RequiresRecentLoginError",
    "AccountNotFoundError",
    "BackendUnavailableError",
]


class BlueprintError(Exception):
    """Base exception class for all custom errors in the Blueprint application.

    Attributes:
        message (str): A human-readable error message, suitable for logging.
        code (str): A unique, machine-readable error code for identifying
                    the type of error programmatically.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Backend errors (raised by identity/data provider implementations)
# ---------------------------------------------------------------------------


class BackendError(BlueprintError):
    """Raised when the identity/data backend rejects or fails an operation.

    The `code` is the backend's own error code (for example
    ``"auth/email-already-in-use"``). Codes the translator does not recognize
    are surfaced to users as a generic failure, never verbatim.
    """

    def __init__(self, message: str = "Backend operation failed", code: str = "backend_error"):
        super().__init__(message, code)


class EmailInUseError(BackendError):
    """Raised by create-account when the email already has an account."""

    def __init__(self, message: str = "Email already in use", code: str = "auth/email-already-in-use"):
        super().__init__(message, code)


class WeakPasswordError(BackendError):
    """Raised by create-account when the backend's password rules reject the password."""

    def __init__(self, message: str = "Password is too weak", code: str = "auth/weak-password"):
        super().__init__(message, code)


class InvalidCredentialsError(BackendError):
    """Raised by sign-in when the email/password pair does not match an account.

    To prevent user enumeration, unknown accounts and wrong passwords share
    this error and the same user-facing message.
    """

    def __init__(self, message: str = "Invalid credentials", code: str = "auth/invalid-credential"):
        super().__init__(message, code)


class TooManyRequestsError(BackendError):
    """Raised when the backend's own server-side limiter refuses the request.

    This is independent of the client-side limiter in this package.
    """

    def __init__(self, message: str = "Too many requests", code: str = "auth/too-many-requests"):
        super().__init__(message, code)


class RequiresRecentLoginError(BackendError):
    """Raised by update-password when the session is too old for sensitive changes."""

    def __init__(self, message: str = "Recent login required", code: str = "auth/requires-recent-login"):
        super().__init__(message, code)


class AccountNotFoundError(BackendError):
    """Raised when an operation targets an email with no account."""

    def __init__(self, message: str = "Account not found", code: str = "auth/user-not-found"):
        super().__init__(message, code)


class BackendUnavailableError(BackendError):
    """Raised when the backend cannot be reached or answers unexpectedly."""

    def __init__(self, message: str = "Backend unavailable", code: str = "backend_unavailable"):
        super().__init__(message, code)
