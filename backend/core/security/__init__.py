"""
Security utilities for authentication and credential storage.
"""

from .encryption import CredentialEncryption
from .password import PasswordHasher, password_hasher
from .tokens import TokenPayload, TokenService

__all__ = [
    "CredentialEncryption",
    "PasswordHasher",
    "password_hasher",
    "TokenService",
    "TokenPayload",
]
