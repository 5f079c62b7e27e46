"""
Authentication request and response schemas.
"""

from pydantic import EmailStr, Field, field_validator

from .common import CamelModel


class LoginRequest(CamelModel):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class RegisterRequest(CamelModel):
    """Registration request schema."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()


class UserResponse(CamelModel):
    """Public user fields."""

    id: str
    email: str


class AuthResponse(CamelModel):
    """Returned by register and login."""

    user: UserResponse
    token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until the token expires


class MeResponse(CamelModel):
    id: str
    email: str
    onboarding_completed: bool = False
