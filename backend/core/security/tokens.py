"""
JWT token service for authentication.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt


@dataclass
class TokenPayload:
    """JWT token payload structure."""

    sub: str  # Subject (user ID)
    exp: datetime  # Expiration time
    iat: datetime  # Issued at
    type: str  # Token type, always "access" for tokens issued here
    email: str | None = None


class TokenService:
    """Service for creating and validating JWT bearer tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 60 * 24 * 7,
    ):
        """
        Initialize the token service.

        Args:
            secret_key: Secret key for signing tokens
            algorithm: JWT algorithm (default: HS256)
            access_token_expire_minutes: Access token lifetime in minutes
        """
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._access_token_expire_minutes = access_token_expire_minutes

    @property
    def expires_in(self) -> int:
        """Access token lifetime in seconds."""
        return self._access_token_expire_minutes * 60

    def create_access_token(
        self,
        user_id: str,
        email: str | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        """
        Create an access token.

        Args:
            user_id: User ID to encode in the token
            email: Optional email to include
            expires_delta: Override the configured lifetime (negative values
                produce an already-expired token, which tests rely on)

        Returns:
            Encoded JWT access token
        """
        now = datetime.now(UTC)
        lifetime = expires_delta if expires_delta is not None else timedelta(
            minutes=self._access_token_expire_minutes
        )

        payload = {
            "sub": user_id,
            "exp": now + lifetime,
            "iat": now,
            "type": "access",
        }
        if email:
            payload["email"] = email

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode_token(self, token: str) -> TokenPayload | None:
        """
        Decode and validate a JWT token.

        Signature and expiry are checked by python-jose.

        Returns:
            TokenPayload if valid, None if invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except JWTError:
            return None

        if not all(field in payload for field in ("sub", "exp", "type")):
            return None
        if not isinstance(payload["sub"], str) or not payload["sub"]:
            return None

        return TokenPayload(
            sub=payload["sub"],
            exp=datetime.fromtimestamp(payload["exp"], tz=UTC),
            iat=datetime.fromtimestamp(payload.get("iat", 0), tz=UTC),
            type=payload["type"],
            email=payload.get("email"),
        )

    def verify_access_token(self, token: str) -> TokenPayload | None:
        """
        Verify an access token.

        Returns:
            TokenPayload if valid access token, None otherwise
        """
        payload = self.decode_token(token)
        if payload and payload.type == "access":
            return payload
        return None
