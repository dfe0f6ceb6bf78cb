"""Domain interfaces for the external identity and profile backends.

Adapters implementing these live in the host application.
"""

from .identity import IIdentityProvider
from .repositories import IProfileRepository

__all__ = ["IIdentityProvider", "IProfileRepository"]
