"""
User repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from nutshell.models.user import UserAccount, UserProfileUpdate


class IUserRepository(ABC):
    """Abstract interface for user persistence."""

    @abstractmethod
    async def get(self, user_id: str) -> Optional[UserAccount]:
        """Get a user by ID."""
        pass

    @abstractmethod
    async def upsert(self, user_id: str, profile: UserProfileUpdate) -> UserAccount:
        """Create the user if missing, then apply the profile fields that were set."""
        pass
