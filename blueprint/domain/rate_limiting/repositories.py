"""
Rate Limiting Domain Repositories

Storage contract for fixed-window counters. The limiter owns the
read-check-increment sequence and serializes it, so implementations only
need plain get/put/delete semantics.

Design Principles:
- Dependency Inversion: the limiter depends on this abstraction
- Testability: implementations can be swapped or mocked in tests
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterable, Optional

from .entities import RateLimitWindow
from .value_objects import RateLimitKey


class IRateLimitWindowRepository(ABC):
    """Storage for one `RateLimitWindow` per `RateLimitKey`."""

    @abstractmethod
    def get(self, key: RateLimitKey) -> Optional[RateLimitWindow]:
        """Return the stored window for the key, if any."""
        raise NotImplementedError

    @abstractmethod
    def save(self, window: RateLimitWindow) -> None:
        """Store the window, replacing any window with the same key."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: RateLimitKey) -> bool:
        """Remove the key's window.

        Returns:
            True if a window was removed, False if none was stored.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_where(self, predicate: Callable[[RateLimitWindow], bool]) -> int:
        """Remove every window matching the predicate and return how many were removed."""
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        """Remove every window."""
        raise NotImplementedError

    @abstractmethod
    def windows(self) -> Iterable[RateLimitWindow]:
        """Snapshot of all stored windows."""
        raise NotImplementedError
