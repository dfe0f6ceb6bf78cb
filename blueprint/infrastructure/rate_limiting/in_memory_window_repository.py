"""In-memory storage for fixed-window rate-limit counters.

This is the default window repository. Counters live for the lifetime of the
process; a restart starts every key from zero, which only ever makes the
client more permissive since the backend enforces its own limits.
"""

from typing import Callable, Dict, List, Optional

import structlog

from blueprint.domain.rate_limiting.entities import RateLimitWindow
from blueprint.domain.rate_limiting.repositories import IRateLimitWindowRepository
from blueprint.domain.rate_limiting.value_objects import RateLimitKey

logger = structlog.get_logger(__name__)


class InMemoryRateLimitWindowRepository(IRateLimitWindowRepository):
    """Dictionary-backed window storage.

    Not synchronized on its own: `FixedWindowRateLimiter` holds its lock
    around every call.
    """

    def __init__(self):
        self._windows: Dict[RateLimitKey, RateLimitWindow] = {}

    def get(self, key: RateLimitKey) -> Optional[RateLimitWindow]:
        return self._windows.get(key)

    def save(self, window: RateLimitWindow) -> None:
        self._windows[window.key] = window

    def delete(self, key: RateLimitKey) -> bool:
        return self._windows.pop(key, None) is not None

    def delete_where(self, predicate: Callable[[RateLimitWindow], bool]) -> int:
        doomed = [key for key, window in self._windows.items() if predicate(window)]
        for key in doomed:
            del self._windows[key]
        return len(doomed)

    def clear(self) -> None:
        removed = len(self._windows)
        self._windows.clear()
        logger.debug("Rate limit windows cleared", removed=removed)

    def windows(self) -> List[RateLimitWindow]:
        return list(self._windows.values())

    def __len__(self) -> int:
        return len(self._windows)
