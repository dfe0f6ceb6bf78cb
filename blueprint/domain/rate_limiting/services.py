"""Rate Limiting Domain Services

`FixedWindowRateLimiter` decides whether an attempt at a named action is
admitted for a given identifier. Each (action, identifier) pair gets one
counter that resets entirely when its window expires.

Behaviour:
- The first attempt for a key, or the first after its window expired, opens
  a new window starting now.
- Every attempt is counted, including denied ones, and denials never move
  the window boundary.
- Once the count exceeds the policy's max_attempts the attempt is denied
  with the seconds left in the window.

The limiter is an explicit instance with injectable storage and clock, so
tests and multiple hosts in one process never share state by accident.
"""

import math
import threading
import time
from typing import Callable, Optional, Union

import structlog

from blueprint.utils.i18n import get_translated_message
from blueprint.utils.security import mask_identifier

from .entities import RateLimitDecision, RateLimitWindow
from .repositories import IRateLimitWindowRepository
from .value_objects import RateLimitAction, RateLimitKey, RateLimitPolicyTable

logger = structlog.get_logger(__name__)

Clock = Callable[[], int]


def system_clock_ms() -> int:
    """Current wall-clock time in whole milliseconds."""
    return int(time.time() * 1000)


class FixedWindowRateLimiter:
    """Fixed-window attempt limiter keyed by action and identifier.

    The read-check-increment sequence, `reset`, `cleanup` and `clear_all`
    all run under one lock, so concurrent callers never lose an update.

    Args:
        policies: Policy table; unlisted actions use its ``default`` policy.
        repository: Window storage.
        clock: Returns the current time in milliseconds.
    """

    def __init__(
        self,
        policies: RateLimitPolicyTable,
        repository: IRateLimitWindowRepository,
        clock: Optional[Clock] = None,
    ):
        self._policies = policies
        self._repository = repository
        self._clock = clock if clock is not None else system_clock_ms
        self._lock = threading.Lock()

        logger.info(
            "FixedWindowRateLimiter initialized",
            actions=sorted(policies.actions),
            repository=type(self._repository).__name__,
        )

    @property
    def policies(self) -> RateLimitPolicyTable:
        return self._policies

    def check_limit(
        self,
        action: Union[RateLimitAction, str],
        identifier: str,
        language: str = "en",
    ) -> RateLimitDecision:
        """Count one attempt and decide whether it is admitted.

        Args:
            action: Action name; resolved to its policy or the default one.
            identifier: Opaque per-user key, used exactly as given.
            language: Language of the denial message.

        Returns:
            RateLimitDecision: Admission with the attempt count, or a denial
            with ``retry_after_seconds`` and a user-presentable message.
        """
        key = RateLimitKey(action=action, identifier=identifier)
        policy = self._policies.policy_for(key.action)

        with self._lock:
            now = self._clock()
            window = self._repository.get(key)
            if window is None or window.is_expired(now):
                window = RateLimitWindow.open(key, policy, now)
            window = window.record_attempt()
            self._repository.save(window)

        if window.count > policy.max_attempts:
            retry_after = window.retry_after_seconds(now)
            minutes = math.ceil(retry_after / 60)
            message = get_translated_message("rate_limit_exceeded", language).format(
                minutes=minutes
            )
            logger.warning(
                "Rate limit exceeded",
                action=key.action,
                identifier=mask_identifier(identifier),
                count=window.count,
                limit=policy.max_attempts,
                retry_after_seconds=retry_after,
            )
            return RateLimitDecision.denied_result(
                count=window.count,
                limit=policy.max_attempts,
                retry_after_seconds=retry_after,
                message=message,
            )

        logger.debug(
            "Rate limit attempt admitted",
            action=key.action,
            identifier=mask_identifier(identifier),
            count=window.count,
            limit=policy.max_attempts,
        )
        return RateLimitDecision.allowed_result(count=window.count, limit=policy.max_attempts)

    def reset(self, action: Union[RateLimitAction, str], identifier: str) -> None:
        """Forget the key's window so the next attempt counts as the first."""
        key = RateLimitKey(action=action, identifier=identifier)
        with self._lock:
            removed = self._repository.delete(key)
        if removed:
            logger.debug(
                "Rate limit reset",
                action=key.action,
                identifier=mask_identifier(identifier),
            )

    def cleanup(self) -> int:
        """Remove every expired window.

        Returns:
            int: Number of windows removed.
        """
        with self._lock:
            now = self._clock()
            removed = self._repository.delete_where(lambda window: window.is_expired(now))
        if removed:
            logger.debug("Expired rate limit windows removed", removed=removed)
        return removed

    def clear_all(self) -> None:
        """Remove every window, expired or not."""
        with self._lock:
            self._repository.clear()
        logger.info("All rate limit windows cleared")

    def get_window(
        self, action: Union[RateLimitAction, str], identifier: str
    ) -> Optional[RateLimitWindow]:
        """Read-only snapshot of the key's stored window, expired or not."""
        key = RateLimitKey(action=action, identifier=identifier)
        with self._lock:
            return self._repository.get(key)
