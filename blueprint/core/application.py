"""Application factory for wiring the request gate.

The host application supplies the backend adapters; everything else (policy
table, limiter, validator, cleanup task and gate service) is built here from
settings as one explicit object.
"""

from dataclasses import dataclass
from typing import Optional

from blueprint.core.config.settings import Settings
from blueprint.core.config.settings import settings as default_settings
from blueprint.core.logging import logger
from blueprint.domain.interfaces.identity import IIdentityProvider
from blueprint.domain.interfaces.repositories import IProfileRepository
from blueprint.domain.rate_limiting.cleanup import RateLimitCleanupTask
from blueprint.domain.rate_limiting.repositories import IRateLimitWindowRepository
from blueprint.domain.rate_limiting.services import Clock, FixedWindowRateLimiter
from blueprint.domain.rate_limiting.value_objects import RateLimitPolicyTable
from blueprint.domain.services.authentication.authentication_gate_service import (
    AuthenticationGateService,
)
from blueprint.domain.validation.field_schema import FieldSchemaSet
from blueprint.domain.validation.validators import FieldValidator
from blueprint.infrastructure.rate_limiting.in_memory_window_repository import (
    InMemoryRateLimitWindowRepository,
)


@dataclass(frozen=True)
class ApplicationContext:
    """Everything a host needs to gate authentication requests."""

    settings: Settings
    policies: RateLimitPolicyTable
    rate_limiter: FixedWindowRateLimiter
    validator: FieldValidator
    cleanup_task: RateLimitCleanupTask
    gate: AuthenticationGateService


def create_application_context(
    identity_provider: IIdentityProvider,
    profile_repository: IProfileRepository,
    settings: Optional[Settings] = None,
    clock: Optional[Clock] = None,
    window_repository: Optional[IRateLimitWindowRepository] = None,
) -> ApplicationContext:
    """Create and wire the request gate.

    Args:
        identity_provider: Authentication backend adapter.
        profile_repository: Profile store adapter.
        settings: Configuration; defaults to the process-wide settings.
        clock: Millisecond clock for the limiter; defaults to wall-clock time.
        window_repository: Rate-limit window storage; defaults to a fresh
            in-memory repository.

    Returns:
        ApplicationContext: The wired components. The cleanup task is not
        started; use `application_lifespan` for that.
    """
    if settings is None:
        settings = default_settings
    if window_repository is None:
        window_repository = InMemoryRateLimitWindowRepository()

    policies = RateLimitPolicyTable.from_settings(settings)
    rate_limiter = FixedWindowRateLimiter(policies, window_repository, clock=clock)
    validator = FieldValidator(FieldSchemaSet.from_settings(settings))
    cleanup_task = RateLimitCleanupTask(
        rate_limiter, interval_seconds=settings.RATE_LIMIT_CLEANUP_INTERVAL_SECONDS
    )
    gate = AuthenticationGateService(
        identity_provider=identity_provider,
        profile_repository=profile_repository,
        rate_limiter=rate_limiter,
        validator=validator,
    )

    logger.info(
        "application_context_created",
        project=settings.PROJECT_NAME,
        env=settings.APP_ENV,
        actions=sorted(policies.actions),
    )
    return ApplicationContext(
        settings=settings,
        policies=policies,
        rate_limiter=rate_limiter,
        validator=validator,
        cleanup_task=cleanup_task,
        gate=gate,
    )
