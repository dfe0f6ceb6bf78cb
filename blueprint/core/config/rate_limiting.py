"""Rate limiting settings.

The policy table is the only tunable part of the rate limiter. It is read once
at startup and handed to the limiter as an immutable value object, so changing
a limit means changing the environment and restarting the application.

Example ``.env`` entry::

    RATE_LIMIT_POLICIES='{"login": {"max_attempts": 5, "window_ms": 900000},
                          "default": {"max_attempts": 10, "window_ms": 60000}}'
"""

from typing import Dict

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class RateLimitPolicyConfig(BaseModel):
    """Attempt budget for a single action."""

    max_attempts: int = Field(gt=0)
    window_ms: int = Field(gt=0)


DEFAULT_RATE_LIMIT_POLICIES: Dict[str, RateLimitPolicyConfig] = {
    "login": RateLimitPolicyConfig(max_attempts=5, window_ms=15 * 60 * 1000),
    "register": RateLimitPolicyConfig(max_attempts=3, window_ms=60 * 60 * 1000),
    "password_reset": RateLimitPolicyConfig(max_attempts=3, window_ms=60 * 60 * 1000),
    "default": RateLimitPolicyConfig(max_attempts=10, window_ms=60 * 1000),
}


class RateLimitingSettings(BaseSettings):
    """Defines the per-action attempt budgets and the cleanup cadence.

    Security Note:
        - These limits are a client-side courtesy layer. The identity backend
          enforces its own limits, so loosening them here never weakens the
          server-side protection, it only changes how early users get feedback.
    """

    RATE_LIMIT_POLICIES: Dict[str, RateLimitPolicyConfig] = Field(
        default_factory=lambda: dict(DEFAULT_RATE_LIMIT_POLICIES)
    )
    RATE_LIMIT_CLEANUP_INTERVAL_SECONDS: float = Field(gt=0, default=300)

    @field_validator("RATE_LIMIT_POLICIES")
    @classmethod
    def require_default_policy(
        cls, v: Dict[str, RateLimitPolicyConfig]
    ) -> Dict[str, RateLimitPolicyConfig]:
        """Ensures unlisted actions always have a policy to fall back to.

        Args:
            v: Parsed policy table.

        Returns:
            The unchanged policy table.

        Raises:
            ValueError: If the ``default`` entry is missing.
        """
        if "default" not in v:
            raise ValueError("RATE_LIMIT_POLICIES must define a 'default' policy")
        return v
