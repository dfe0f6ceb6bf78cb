"""Rate Limiting Domain Entities

Entities:
- RateLimitWindow: Attempt counter for one key within its current fixed window
- RateLimitDecision: Admission outcome of a single attempt

Design Principles:
- Immutability: a window is replaced, never mutated, so snapshots handed to
  callers cannot drift from the stored state
- Rich Behavior: expiry and retry computations live next to the data
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional

from .value_objects import RateLimitKey, RateLimitPolicy


@dataclass(frozen=True, slots=True)
class RateLimitWindow:
    """Attempt counter for a key until ``expires_at_ms``.

    Business Rules:
    - count is never negative
    - expires_at_ms equals the window start plus the policy's window_ms
    - a window is expired once the clock reaches expires_at_ms
    """

    key: RateLimitKey
    count: int
    expires_at_ms: int

    def __post_init__(self):
        if self.count < 0:
            raise ValueError("Window count cannot be negative")

    @classmethod
    def open(cls, key: RateLimitKey, policy: RateLimitPolicy, now_ms: int) -> RateLimitWindow:
        """Start a fresh window at ``now_ms`` with no attempts recorded."""
        return cls(key=key, count=0, expires_at_ms=now_ms + policy.window_ms)

    def is_expired(self, now_ms: int) -> bool:
        return now_ms >= self.expires_at_ms

    def record_attempt(self) -> RateLimitWindow:
        """Return this window with one more attempt counted."""
        return replace(self, count=self.count + 1)

    def retry_after_seconds(self, now_ms: int) -> int:
        """Whole seconds until the window expires, rounded up."""
        return max(0, math.ceil((self.expires_at_ms - now_ms) / 1000))


@dataclass(frozen=True, slots=True)
class RateLimitDecision:
    """Result of checking one attempt against its policy.

    ``retry_after_seconds`` and ``message`` are set only for denials. The
    retry value is advisory.
    """

    allowed: bool
    count: int
    limit: int
    retry_after_seconds: Optional[int] = None
    message: Optional[str] = None

    @classmethod
    def allowed_result(cls, count: int, limit: int) -> RateLimitDecision:
        return cls(allowed=True, count=count, limit=limit)

    @classmethod
    def denied_result(
        cls, count: int, limit: int, retry_after_seconds: int, message: str
    ) -> RateLimitDecision:
        return cls(
            allowed=False,
            count=count,
            limit=limit,
            retry_after_seconds=retry_after_seconds,
            message=message,
        )

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)
