"""
Rate Limiting Value Objects

Immutable value objects describing what is limited and how strictly.

Value Objects:
- RateLimitAction: The named actions the client gates
- RateLimitKey: (action, identifier) pair identifying one fixed window
- RateLimitPolicy: Maximum attempts per window length
- RateLimitPolicyTable: Policies keyed by action, with a mandatory default

Design Principles:
- Immutability: All value objects are immutable after creation
- Validation: Business rules enforced at construction time
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

from blueprint.core.config.rate_limiting import (
    DEFAULT_RATE_LIMIT_POLICIES,
    RateLimitingSettings,
    RateLimitPolicyConfig,
)


class RateLimitAction(str, Enum):
    """Actions with their own rate-limit policy.

    Any other action name, such as ``password_change``, is limited by the
    DEFAULT policy.
    """

    LOGIN = "login"
    REGISTER = "register"
    PASSWORD_RESET = "password_reset"
    DEFAULT = "default"


# Not a policy of its own; resolves to DEFAULT.
PASSWORD_CHANGE_ACTION = "password_change"


def _action_name(action: Union[RateLimitAction, str]) -> str:
    return action.value if isinstance(action, RateLimitAction) else action


@dataclass(frozen=True, slots=True)
class RateLimitKey:
    """
    Identifies a single fixed window.

    The identifier is opaque: it is used exactly as given, without trimming
    or case folding, so "User@x.com" and "user@x.com" are distinct keys.
    """

    action: str
    identifier: str

    def __post_init__(self):
        object.__setattr__(self, "action", _action_name(self.action))
        if not self.action:
            raise ValueError("Rate limit action cannot be empty")
        if not isinstance(self.identifier, str):
            raise ValueError("Rate limit identifier must be a string")

    @property
    def composite_key(self) -> str:
        return f"{self.action}:{self.identifier}"


@dataclass(frozen=True, slots=True)
class RateLimitPolicy:
    """
    Maximum number of admitted attempts per fixed window.

    Business Rules:
    - max_attempts is a positive integer
    - window_ms is a positive integer number of milliseconds
    """

    max_attempts: int
    window_ms: int

    def __post_init__(self):
        for name in ("max_attempts", "window_ms"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer")


class RateLimitPolicyTable:
    """Read-only table of policies keyed by action name.

    The table always contains a ``default`` policy, used for every action
    without an entry of its own.
    """

    def __init__(self, policies: Mapping[str, RateLimitPolicy]):
        normalized = {_action_name(action): policy for action, policy in policies.items()}
        if RateLimitAction.DEFAULT.value not in normalized:
            raise ValueError("Rate limit policies must define a 'default' policy")
        for action, policy in normalized.items():
            if not isinstance(policy, RateLimitPolicy):
                raise ValueError(f"Invalid policy for action '{action}'")
        self._policies: Mapping[str, RateLimitPolicy] = MappingProxyType(normalized)

    @classmethod
    def from_configs(cls, configs: Mapping[str, RateLimitPolicyConfig]) -> RateLimitPolicyTable:
        return cls(
            {
                action: RateLimitPolicy(
                    max_attempts=config.max_attempts, window_ms=config.window_ms
                )
                for action, config in configs.items()
            }
        )

    @classmethod
    def default(cls) -> RateLimitPolicyTable:
        """Table built from the built-in settings defaults."""
        return cls.from_configs(DEFAULT_RATE_LIMIT_POLICIES)

    @classmethod
    def from_settings(cls, settings: RateLimitingSettings) -> RateLimitPolicyTable:
        return cls.from_configs(settings.RATE_LIMIT_POLICIES)

    def policy_for(self, action: Union[RateLimitAction, str]) -> RateLimitPolicy:
        """Return the action's policy, falling back to ``default``."""
        return self._policies.get(
            _action_name(action), self._policies[RateLimitAction.DEFAULT.value]
        )

    @property
    def actions(self) -> Mapping[str, RateLimitPolicy]:
        return self._policies

    def __contains__(self, action: object) -> bool:
        if isinstance(action, (RateLimitAction, str)):
            return _action_name(action) in self._policies
        return False
