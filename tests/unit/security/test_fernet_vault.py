"""Unit tests for the Fernet credential vault."""

import base64

import pytest

from infrastructure.security.fernet_vault import FernetCredentialVault, derive_fernet_key


@pytest.fixture
def vault() -> FernetCredentialVault:
    return FernetCredentialVault("vault-secret")


class TestEncryptDecrypt:
    @pytest.mark.parametrize("plaintext", ["s3cret", "pässwörd ñ", "a" * 200])
    def test_round_trip(self, vault: FernetCredentialVault, plaintext: str):
        assert vault.decrypt(vault.encrypt(plaintext)) == plaintext

    def test_ciphertext_differs_from_plaintext(self, vault: FernetCredentialVault):
        assert vault.encrypt("s3cret") != "s3cret"

    def test_same_plaintext_encrypts_differently(self, vault: FernetCredentialVault):
        assert vault.encrypt("s3cret") != vault.encrypt("s3cret")

    def test_empty_input_stays_empty(self, vault: FernetCredentialVault):
        assert vault.encrypt("") == ""
        assert vault.decrypt("") == ""


class TestDecryptFailures:
    def test_garbage_returns_empty_string(self, vault: FernetCredentialVault):
        assert vault.decrypt("garbage") == ""

    def test_other_secret_cannot_decrypt(self, vault: FernetCredentialVault):
        ciphertext = vault.encrypt("s3cret")

        assert FernetCredentialVault("another-secret").decrypt(ciphertext) == ""

    def test_tampered_token_returns_empty_string(self, vault: FernetCredentialVault):
        ciphertext = vault.encrypt("s3cret")
        tampered = ciphertext[:-4] + ("AAAA" if not ciphertext.endswith("AAAA") else "BBBB")

        assert vault.decrypt(tampered) == ""


class TestKeyDerivation:
    def test_key_is_valid_fernet_key(self):
        key = derive_fernet_key("any secret at all")

        assert len(base64.urlsafe_b64decode(key)) == 32

    def test_derivation_is_deterministic(self):
        assert derive_fernet_key("abc") == derive_fernet_key("abc")
        assert derive_fernet_key("abc") != derive_fernet_key("abd")

    def test_repr_hides_secret(self):
        assert "vault-secret" not in repr(FernetCredentialVault("vault-secret"))
