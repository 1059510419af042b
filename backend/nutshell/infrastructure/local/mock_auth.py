"""
Mock authentication provider for local development.
"""

from nutshell.core.exceptions import AuthenticationError, ErrorCode
from nutshell.interfaces.auth_provider import IAuthProvider, User


class MockAuthProvider(IAuthProvider):
    """Mock auth provider that treats the bearer token as the user id."""

    def __init__(self, enabled: bool = False):
        """
        Initialize mock auth provider.

        Args:
            enabled: Whether authentication is required
        """
        self._enabled = enabled

    async def verify_token(self, token: str) -> User:
        """
        Verify token - in mock mode, token is treated as user_id.

        Raises:
            AuthenticationError: If the token is blank
        """
        token = token.strip()
        if not token:
            raise AuthenticationError(ErrorCode.UNAUTHORIZED, "Empty bearer token")
        if "@" in token:
            return User(id=token, email=token, display_name=token)
        return User(id=token, email=f"{token}@example.com", display_name=token)

    def is_enabled(self) -> bool:
        """Check if authentication is enabled."""
        return self._enabled
