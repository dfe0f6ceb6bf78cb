"""Identity provider interface.

The identity provider is the hosted authentication backend. It owns password
storage, sessions and reset emails; this package only gates calls to it.
Implementations raise `BackendError` subclasses carrying the backend's error
code so the gate service can translate them into stable messages.
"""

from abc import ABC, abstractmethod
from typing import Optional

from blueprint.domain.entities.account import Account


class IIdentityProvider(ABC):
    """Interface for the authentication backend."""

    @abstractmethod
    async def create_account(self, email: str, password: str) -> Account:
        """Creates an account and signs it in.

        Raises:
            EmailInUseError: If the email already has an account.
            WeakPasswordError: If the backend rejects the password.
        """
        raise NotImplementedError

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> Account:
        """Signs in with email and password.

        Raises:
            InvalidCredentialsError: If the pair does not match an account.
            TooManyRequestsError: If the backend's own limiter refuses.
        """
        raise NotImplementedError

    @abstractmethod
    async def sign_out(self) -> None:
        """Ends the current session."""
        raise NotImplementedError

    @abstractmethod
    async def send_password_reset_email(self, email: str) -> None:
        """Sends a password reset email.

        Raises:
            AccountNotFoundError: If no account uses the email.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_password(self, new_password: str) -> None:
        """Changes the password of the signed-in account.

        Raises:
            RequiresRecentLoginError: If the session is too old.
        """
        raise NotImplementedError

    @abstractmethod
    def current_account(self) -> Optional[Account]:
        """Returns the signed-in account, or `None` when signed out."""
        raise NotImplementedError
