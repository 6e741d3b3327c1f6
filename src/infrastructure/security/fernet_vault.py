"""Fernet-based credential vault.

The Fernet key is derived from ``CRYPTO_SECRET_KEY`` so any secret string
can be configured. There is no key rotation: changing the secret makes
every stored ciphertext undecryptable, and ``decrypt`` then returns "".
"""

import base64
import hashlib
from functools import lru_cache

import structlog
from cryptography.fernet import Fernet, InvalidToken

from core.config import settings

logger = structlog.get_logger()


def derive_fernet_key(secret: str) -> bytes:
    """Turn an arbitrary secret string into a 32-byte url-safe Fernet key."""
    digest = hashlib.sha256(secret.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest)


class FernetCredentialVault:
    """Symmetric encryption of account passwords with a process-wide secret."""

    def __init__(self, secret_key: str = settings.crypto_secret_key) -> None:
        self._fernet = Fernet(derive_fernet_key(secret_key))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(secret_key=***)"

    def encrypt(self, plaintext: str) -> str:
        """Encrypt ``plaintext``. Empty input returns "" without touching the cipher."""
        if not plaintext:
            return ""
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt ``ciphertext``; failures are logged and yield ""."""
        if not ciphertext:
            return ""
        try:
            return self._fernet.decrypt(ciphertext.encode("utf-8")).decode("utf-8")
        except (InvalidToken, UnicodeError, ValueError, TypeError) as exc:
            logger.warning("credential_decrypt_failed", error_type=type(exc).__name__)
            return ""


@lru_cache
def get_credential_vault() -> FernetCredentialVault:
    """Get the vault singleton, built once from settings."""
    return FernetCredentialVault(settings.crypto_secret_key)
