"""Unit tests for provider credential encryption."""

from core.domain.profile import ProviderCredential
from core.security.encryption import CredentialEncryption

KEY = "sk-ant-REDACTED"


def test_seal_and_open():
    encryption = CredentialEncryption("secret-one")
    sealed = encryption.seal(ProviderCredential(api_key=KEY))

    assert KEY not in sealed
    assert encryption.open(sealed) == ProviderCredential(api_key=KEY)


def test_open_with_other_secret_returns_none():
    sealed = CredentialEncryption("secret-one").seal(ProviderCredential(api_key=KEY))

    assert CredentialEncryption("secret-two").open(sealed) is None


def test_open_empty_returns_none():
    encryption = CredentialEncryption("secret-one")

    assert encryption.open(None) is None
    assert encryption.open("") is None


def test_credential_masking():
    credential = ProviderCredential(api_key=KEY)

    assert credential.masked() == "sk-...ghij"
    assert KEY not in repr(credential)
    assert ProviderCredential(api_key="short").masked() == "****"
