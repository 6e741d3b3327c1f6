"""Credential vault protocol."""

from typing import Protocol


class ICredentialVault(Protocol):
    """Reversible encryption for stored service account passwords.

    Plaintext must stay recoverable so the admin panel and the client
    portal can show the original password.
    """

    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt a password.

        Args:
            plaintext: The password to protect

        Returns:
            Ciphertext string, or "" for empty input
        """
        ...

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt a stored password.

        Args:
            ciphertext: Value previously returned by ``encrypt``

        Returns:
            The plaintext, or "" for empty input and for any decryption failure
        """
        ...
