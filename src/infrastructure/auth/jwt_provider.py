"""JWT admin session provider.

The admin panel has a single shared password. A successful login yields a
signed HS256 token that the browser keeps in an HTTP-only cookie:

    {
        "sub": "admin",
        "iat": 1234567000,
        "exp": 1234567890
    }
"""

import hmac
import logging
from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import ADMIN_SUBJECT, AdminSession

logger = logging.getLogger(__name__)


class JWTAuthProvider:
    """JWT-based admin authentication provider."""

    def __init__(
        self,
        admin_password: str = settings.admin_password,
        secret_key: str = settings.session_secret_key,
        algorithm: str = settings.session_algorithm,
        max_age_days: int = settings.session_max_age_days,
    ) -> None:
        self._admin_password = admin_password
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._max_age = timedelta(days=max_age_days)

    @property
    def max_age_seconds(self) -> int:
        return int(self._max_age.total_seconds())

    def verify_password(self, password: str) -> bool:
        """
        Constant-time comparison against the configured admin password.

        An unset admin password rejects every attempt.
        """
        if not self._admin_password or not password:
            return False
        return hmac.compare_digest(
            password.encode("utf-8"), self._admin_password.encode("utf-8")
        )

    async def validate_token(self, token: str) -> Optional[AdminSession]:
        """
        Validate a session token.

        Args:
            token: The JWT to validate

        Returns:
            AdminSession if valid, None if invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except JWTError:
            return None

        if payload.get("sub") != ADMIN_SUBJECT:
            logger.warning("Rejected session token with unexpected subject")
            return None

        iat = payload.get("iat")
        exp = payload.get("exp")
        return AdminSession(
            subject=ADMIN_SUBJECT,
            issued_at=datetime.utcfromtimestamp(iat) if iat else None,
            expires_at=datetime.utcfromtimestamp(exp) if exp else None,
        )

    def create_token(self, session: Optional[AdminSession] = None) -> str:
        """
        Create a signed session token.

        Args:
            session: Optional session to encode; defaults to a fresh admin session

        Returns:
            The generated JWT string
        """
        now = datetime.utcnow()
        session = session or AdminSession()
        expire = session.expires_at or now + self._max_age

        payload: dict = {
            "sub": session.subject,
            "iat": session.issued_at or now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
