"""
Provider credential encryption using Fernet symmetric encryption.
"""

import base64
import hashlib
import logging

from cryptography.fernet import Fernet, InvalidToken

from core.domain.profile import ProviderCredential

logger = logging.getLogger(__name__)


class CredentialEncryption:
    """Encrypts provider API keys before they are written to the profile."""

    def __init__(self, secret_key: str):
        """
        Args:
            secret_key: Application secret key (hashed to 32 bytes for Fernet)
        """
        key_bytes = hashlib.sha256(secret_key.encode()).digest()
        self.fernet = Fernet(base64.urlsafe_b64encode(key_bytes))

    def seal(self, credential: ProviderCredential) -> str:
        """Encrypt a credential for storage."""
        return self.fernet.encrypt(credential.api_key.encode()).decode()

    def open(self, sealed: str | None) -> ProviderCredential | None:
        """
        Decrypt a stored credential.

        Returns None for an empty value or one that no longer decrypts
        (for example after SECRET_KEY rotation); the caller treats both as
        "no credential configured".
        """
        if not sealed:
            return None
        try:
            api_key = self.fernet.decrypt(sealed.encode()).decode()
        except InvalidToken:
            logger.warning("Stored provider credential could not be decrypted")
            return None
        if not api_key:
            return None
        return ProviderCredential(api_key=api_key)
