import pytest

from blueprint.core.exceptions import (
    AccountNotFoundError,
    BackendError,
    BackendUnavailableError,
    BlueprintError,
    EmailInUseError,
    InvalidCredentialsError,
    RequiresRecentLoginError,
    TooManyRequestsError,
    WeakPasswordError,
)


def test_blueprint_error_default():
    # Arrange
    message = "Something went wrong"

    # Act
    error = BlueprintError(message)

    # Assert
    assert error.message == message
    assert error.code == "generic_error"
    assert str(error) == message


def test_backend_error_with_code():
    # Act
    error = BackendError("Quota exceeded", "auth/quota-exceeded")

    # Assert
    assert error.code == "auth/quota-exceeded"
    assert isinstance(error, BlueprintError)


@pytest.mark.parametrize(
    "error_class,code",
    [
        (EmailInUseError, "auth/email-already-in-use"),
        (WeakPasswordError, "auth/weak-password"),
        (InvalidCredentialsError, "auth/invalid-credential"),
        (TooManyRequestsError, "auth/too-many-requests"),
        (RequiresRecentLoginError, "auth/requires-recent-login"),
        (AccountNotFoundError, "auth/user-not-found"),
        (BackendUnavailableError, "backend_unavailable"),
    ],
)
def test_backend_error_default_codes(error_class, code):
    # Act
    error = error_class()

    # Assert
    assert error.code == code
    assert isinstance(error, BackendError)
    assert str(error) == error.message
