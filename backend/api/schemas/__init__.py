"""
API request and response schemas.
"""

from .auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest, UserResponse
from .common import DeletedResponse, Envelope, ErrorEnvelope, MessageEnvelope
from .content import (
    ContentResponse,
    ContentUpdateRequest,
    ContentVersionResponse,
    GenerateRequest,
    ScheduleRequest,
    ScheduleSettings,
)
from .profile import ProfileResponse, ProfileUpdateRequest, SettingsUpdateRequest

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "MeResponse",
    "RegisterRequest",
    "UserResponse",
    "DeletedResponse",
    "Envelope",
    "ErrorEnvelope",
    "MessageEnvelope",
    "ContentResponse",
    "ContentUpdateRequest",
    "ContentVersionResponse",
    "GenerateRequest",
    "ScheduleRequest",
    "ScheduleSettings",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "SettingsUpdateRequest",
]
