"""
Authentication provider interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    """Authenticated caller identity."""

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class IAuthProvider(ABC):
    """Abstract interface for resolving a bearer token into a caller."""

    @abstractmethod
    async def verify_token(self, token: str) -> User:
        """
        Verify a token.

        Raises:
            AuthenticationError: If the token is invalid
        """
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        """Check if authentication is required."""
        pass
