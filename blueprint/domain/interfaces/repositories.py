"""Repository interfaces for user profile persistence.

The profile store is an external document database owned by the backend. The
domain talks to it only through this port; adapters live outside this
package.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional


class IProfileRepository(ABC):
    """An interface defining the contract for profile record persistence.

    Records are plain mappings as produced by `UserProfile.to_record`.
    Implementations raise `BackendError` subclasses when the store fails.
    """

    @abstractmethod
    async def find_profile_by_field(self, field: str, value: Any) -> bool:
        """Checks whether any profile has ``field`` equal to ``value``.

        Args:
            field: Record field name, e.g. ``"username"``.
            value: Exact value to compare against.

        Returns:
            True if at least one matching profile exists.
        """
        raise NotImplementedError

    @abstractmethod
    async def read_profile(self, account_id: str) -> Optional[Dict[str, Any]]:
        """Reads the profile record of an account.

        Returns:
            The stored record, or `None` if the account has no profile.
        """
        raise NotImplementedError

    @abstractmethod
    async def write_profile(self, account_id: str, record: Mapping[str, Any]) -> None:
        """Creates or replaces the profile record of an account."""
        raise NotImplementedError
