"""Export account and profile entities for use across the application."""

from .account import Account
from .profile import SignedInUser, UserProfile

__all__ = ["Account", "UserProfile", "SignedInUser"]
