"""Authentication Gate Domain Service.

Runs every authentication request through the same gate before it reaches
the identity backend:

1. validate the input locally
2. count the attempt against the client-side rate limiter
3. call the backend
4. on success, reset the limiter entry so a legitimate user starts fresh

Invalid input and rate-limited attempts never reach the backend. Nothing is
raised to the caller for expected failures; every operation returns a
`GateResult` carrying a translated message.
"""

from typing import Any, Mapping, Optional

import structlog
from pydantic import ValidationError

from blueprint.core.exceptions import (
    AccountNotFoundError,
    BackendError,
    BackendUnavailableError,
)
from blueprint.domain.entities.account import Account
from blueprint.domain.entities.profile import SignedInUser, UserProfile
from blueprint.domain.interfaces.identity import IIdentityProvider
from blueprint.domain.interfaces.repositories import IProfileRepository
from blueprint.domain.rate_limiting.services import FixedWindowRateLimiter
from blueprint.domain.rate_limiting.value_objects import (
    PASSWORD_CHANGE_ACTION,
    RateLimitAction,
)
from blueprint.domain.security.error_standardization import (
    BackendErrorTranslator,
    GateOperation,
)
from blueprint.domain.validation.input_sanitizer import sanitize_input
from blueprint.domain.validation.results import ValidationResult
from blueprint.domain.validation.validators import FieldValidator, default_validator
from blueprint.utils.i18n import get_translated_message
from blueprint.utils.security import mask_email, mask_identifier

from .results import GateErrorKind, GateResult

logger = structlog.get_logger(__name__)


class AuthenticationGateService:
    """Domain service gating registration, sign-in and password operations.

    Responsibilities:
    - Validate input before any backend call
    - Enforce per-action client-side rate limits
    - Enforce username uniqueness before creating accounts
    - Sanitize profile data before it is stored
    - Translate backend failures into stable messages

    Security Features:
    - Unknown accounts and wrong passwords produce the same message
    - Password reset never reveals whether an email is registered
    - Identifiers are masked in every log event
    """

    def __init__(
        self,
        identity_provider: IIdentityProvider,
        profile_repository: IProfileRepository,
        rate_limiter: FixedWindowRateLimiter,
        validator: Optional[FieldValidator] = None,
        error_translator: Optional[BackendErrorTranslator] = None,
    ):
        """Initialize the gate with its collaborators.

        Args:
            identity_provider: Authentication backend.
            profile_repository: Profile record store.
            rate_limiter: Client-side limiter shared by all operations.
            validator: Field validator; defaults to the configured one.
            error_translator: Backend error translator.
        """
        self._identity_provider = identity_provider
        self._profile_repository = profile_repository
        self._rate_limiter = rate_limiter
        self._validator = validator if validator is not None else default_validator
        self._error_translator = (
            error_translator if error_translator is not None else BackendErrorTranslator()
        )

        logger.info("AuthenticationGateService initialized")

    def _validation_failure(self, result: ValidationResult) -> GateResult:
        return GateResult.failure(GateErrorKind.from_validation(result.kind), result.error)

    def _check_rate_limit(
        self, action: str, identifier: str, language: str
    ) -> Optional[GateResult]:
        decision = self._rate_limiter.check_limit(action, identifier, language)
        if decision.allowed:
            return None
        return GateResult.failure(
            GateErrorKind.RATE_LIMITED,
            decision.message,
            retry_after_seconds=decision.retry_after_seconds,
        )

    async def check_username_exists(self, username: str) -> bool:
        """Check whether a profile already uses the username, case-insensitively.

        Raises:
            BackendUnavailableError: If the profile store cannot be queried.
        """
        try:
            return await self._profile_repository.find_profile_by_field(
                "username", username.lower()
            )
        except BackendError as exc:
            logger.error(
                "Username availability check failed",
                username=mask_identifier(username),
                error_code=exc.code,
            )
            raise BackendUnavailableError("Unable to verify username availability") from exc

    async def register(self, form: Mapping[str, Any], language: str = "en") -> GateResult:
        """Register a new user and store their profile.

        Args:
            form: Registration fields: first_name, last_name, username,
                email, password and confirm_password.
            language: Language of returned messages.

        Returns:
            GateResult: The stored `UserProfile` on success. On validation
            failure the first field error is the message and every field
            error is attached.
        """
        validation = self._validator.validate_registration_form(form, language)
        if not validation.is_valid:
            first_field = next(iter(validation.kinds))
            return GateResult.failure(
                GateErrorKind.from_validation(validation.kinds[first_field]),
                validation.first_error,
                field_errors=validation.errors,
            )

        email = form["email"]
        username = form["username"]

        limited = self._check_rate_limit(RateLimitAction.REGISTER.value, email, language)
        if limited is not None:
            return limited

        logger.info(
            "User registration started",
            email=mask_email(email),
            username=mask_identifier(username),
        )

        try:
            username_taken = await self.check_username_exists(username)
        except BackendUnavailableError:
            return GateResult.failure(
                GateErrorKind.BACKEND_FAILURE,
                get_translated_message("username_check_failed", language),
            )
        if username_taken:
            logger.warning(
                "Registration failed - username already exists",
                username=mask_identifier(username),
            )
            return GateResult.failure(
                GateErrorKind.USERNAME_TAKEN,
                get_translated_message("username_already_taken", language),
            )

        try:
            account = await self._identity_provider.create_account(email, form["password"])
            profile = UserProfile(
                first_name=sanitize_input(form["first_name"]),
                last_name=sanitize_input(form["last_name"]),
                username=sanitize_input(username.lower()),
                email=email,
            )
            await self._profile_repository.write_profile(account.account_id, profile.to_record())
        except BackendError as exc:
            return self._error_translator.translate(exc, GateOperation.REGISTER, language)

        self._rate_limiter.reset(RateLimitAction.REGISTER.value, email)
        logger.info(
            "User registered successfully",
            account_id=account.account_id,
            username=mask_identifier(profile.username),
        )
        return GateResult.success(profile)

    async def login(self, email: Any, password: Any, language: str = "en") -> GateResult:
        """Sign in with email and password.

        Returns:
            GateResult: The signed-in `Account` on success.
        """
        for result in (
            self._validator.validate_email(email, language),
            self._validator.validate_password(password, language),
        ):
            if not result.is_valid:
                return self._validation_failure(result)

        limited = self._check_rate_limit(RateLimitAction.LOGIN.value, email, language)
        if limited is not None:
            return limited

        try:
            account = await self._identity_provider.sign_in(email, password)
        except BackendError as exc:
            return self._error_translator.translate(exc, GateOperation.LOGIN, language)

        self._rate_limiter.reset(RateLimitAction.LOGIN.value, email)
        logger.info("User signed in", account_id=account.account_id, email=mask_email(email))
        return GateResult.success(account)

    async def logout(self, language: str = "en") -> GateResult:
        """Sign out of the current session. Not rate limited."""
        try:
            await self._identity_provider.sign_out()
        except BackendError as exc:
            return self._error_translator.translate(exc, GateOperation.LOGOUT, language)
        logger.info("User signed out")
        return GateResult.success()

    async def send_password_reset(self, email: Any, language: str = "en") -> GateResult:
        """Send a password reset email.

        An unknown email is reported as success so callers cannot probe which
        addresses are registered.
        """
        validation = self._validator.validate_email(email, language)
        if not validation.is_valid:
            return self._validation_failure(validation)

        limited = self._check_rate_limit(RateLimitAction.PASSWORD_RESET.value, email, language)
        if limited is not None:
            return limited

        try:
            await self._identity_provider.send_password_reset_email(email)
        except AccountNotFoundError:
            logger.info("Password reset requested for unknown account", email=mask_email(email))
            return GateResult.success()
        except BackendError as exc:
            logger.error("Password reset email failed", email=mask_email(email), error_code=exc.code)
            return GateResult.failure(
                GateErrorKind.BACKEND_FAILURE,
                get_translated_message("password_reset_failed", language),
            )

        self._rate_limiter.reset(RateLimitAction.PASSWORD_RESET.value, email)
        logger.info("Password reset email sent", email=mask_email(email))
        return GateResult.success()

    async def update_password(self, new_password: Any, language: str = "en") -> GateResult:
        """Change the signed-in account's password.

        Attempts are limited per account id under the default policy.
        """
        validation = self._validator.validate_password(new_password, language)
        if not validation.is_valid:
            return self._validation_failure(validation)

        account = self._identity_provider.current_account()
        if account is None:
            return GateResult.failure(
                GateErrorKind.NOT_SIGNED_IN,
                get_translated_message("no_user_logged_in", language),
            )

        limited = self._check_rate_limit(PASSWORD_CHANGE_ACTION, account.account_id, language)
        if limited is not None:
            return limited

        try:
            await self._identity_provider.update_password(new_password)
        except BackendError as exc:
            return self._error_translator.translate(exc, GateOperation.PASSWORD_UPDATE, language)

        self._rate_limiter.reset(PASSWORD_CHANGE_ACTION, account.account_id)
        logger.info("Password updated", account_id=account.account_id)
        return GateResult.success()

    async def load_signed_in_user(self, account: Account) -> SignedInUser:
        """Combine an account with its stored profile.

        A missing or unreadable profile yields ``profile=None``; the failure
        is logged, never raised.
        """
        try:
            record = await self._profile_repository.read_profile(account.account_id)
        except BackendError as exc:
            logger.error(
                "Error fetching user profile",
                account_id=account.account_id,
                error_code=exc.code,
            )
            return SignedInUser(account=account)

        if record is None:
            logger.info("No profile stored for account", account_id=account.account_id)
            return SignedInUser(account=account)

        try:
            profile = UserProfile.from_record(record)
        except ValidationError as exc:
            logger.error(
                "Stored user profile is malformed",
                account_id=account.account_id,
                error_count=exc.error_count(),
            )
            return SignedInUser(account=account)
        return SignedInUser(account=account, profile=profile)
