"""Authentication provider protocol."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol

ADMIN_SUBJECT = "admin"


@dataclass
class AdminSession:
    """Represents an authenticated admin extracted from a session token."""

    subject: str = ADMIN_SUBJECT
    issued_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None


class IAuthProvider(Protocol):
    """Protocol for admin authentication providers."""

    def verify_password(self, password: str) -> bool:
        """
        Check a login attempt against the configured admin password.

        Args:
            password: The password typed into the login form

        Returns:
            True on match, False otherwise
        """
        ...

    async def validate_token(self, token: str) -> Optional[AdminSession]:
        """
        Validate a session token.

        Args:
            token: The token from the session cookie or bearer header

        Returns:
            AdminSession if valid, None if invalid or expired
        """
        ...

    def create_token(self, session: AdminSession) -> str:
        """
        Create a session token.

        Args:
            session: The session to encode

        Returns:
            The generated token string
        """
        ...
