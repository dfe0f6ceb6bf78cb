import pytest

from blueprint.core.exceptions import (
    AccountNotFoundError,
    BackendError,
    EmailInUseError,
    InvalidCredentialsError,
    RequiresRecentLoginError,
    TooManyRequestsError,
    WeakPasswordError,
)
from blueprint.domain.security.error_standardization import (
    BackendErrorTranslator,
    GateOperation,
)
from blueprint.domain.services.authentication.results import GateErrorKind


@pytest.fixture
def translator():
    return BackendErrorTranslator()


class TestBackendErrorTranslator:

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "error,operation,kind,message",
        [
            (EmailInUseError(), GateOperation.REGISTER, GateErrorKind.EMAIL_IN_USE,
             "Email address is already registered"),
            (WeakPasswordError(), GateOperation.REGISTER, GateErrorKind.WEAK_PASSWORD,
             "Password is too weak"),
            (InvalidCredentialsError(), GateOperation.LOGIN, GateErrorKind.INVALID_CREDENTIALS,
             "Invalid email or password"),
            (TooManyRequestsError(), GateOperation.LOGIN, GateErrorKind.TOO_MANY_REQUESTS,
             "Too many failed login attempts. Please try again later."),
            (RequiresRecentLoginError(), GateOperation.PASSWORD_UPDATE,
             GateErrorKind.REQUIRES_RECENT_LOGIN,
             "Please log out and log back in before changing your password"),
        ],
    )
    def test_known_codes(self, translator, error, operation, kind, message):
        result = translator.translate(error, operation)
        assert not result.ok
        assert result.error_kind == kind
        assert result.message == message

    @pytest.mark.unit
    @pytest.mark.parametrize("code", ["auth/user-not-found", "auth/wrong-password"])
    def test_unknown_account_and_wrong_password_look_the_same(self, translator, code):
        result = translator.translate(BackendError("x", code), GateOperation.LOGIN)
        expected = translator.translate(InvalidCredentialsError(), GateOperation.LOGIN)
        assert (result.error_kind, result.message) == (expected.error_kind, expected.message)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "operation,message",
        [
            (GateOperation.REGISTER, "Registration failed. Please try again."),
            (GateOperation.LOGIN, "Login failed. Please try again."),
            (GateOperation.LOGOUT, "Logout failed. Please try again."),
            (GateOperation.PASSWORD_RESET, "Failed to send password reset email. Please try again."),
            (GateOperation.PASSWORD_UPDATE, "Failed to update password. Please try again."),
        ],
    )
    def test_unrecognized_code_uses_operation_fallback(self, translator, operation, message):
        result = translator.translate(
            BackendError("internal detail", "auth/internal-error"), operation
        )
        assert result.error_kind == GateErrorKind.BACKEND_FAILURE
        assert result.message == message
        assert "internal" not in result.message

    @pytest.mark.unit
    def test_spanish(self, translator):
        result = translator.translate(InvalidCredentialsError(), GateOperation.LOGIN, "es")
        assert result.message == "Correo o contraseña no válidos"

    @pytest.mark.unit
    def test_account_not_found_code(self, translator):
        assert AccountNotFoundError().code == "auth/user-not-found"
