"""Rate Limiting Domain Module

Fixed-window rate limiting for client-side request gating:

- Value Objects: actions, keys, policies and the policy table
- Entities: windows and admission decisions
- Repositories: storage contract for windows

The limiter itself lives in `services` and its periodic sweep in `cleanup`.
"""

from .entities import RateLimitDecision, RateLimitWindow
from .repositories import IRateLimitWindowRepository
from .value_objects import (
    PASSWORD_CHANGE_ACTION,
    RateLimitAction,
    RateLimitKey,
    RateLimitPolicy,
    RateLimitPolicyTable,
)

__all__ = [
    "PASSWORD_CHANGE_ACTION",
    "RateLimitAction",
    "RateLimitKey",
    "RateLimitPolicy",
    "RateLimitPolicyTable",
    "RateLimitWindow",
    "RateLimitDecision",
    "IRateLimitWindowRepository",
]
