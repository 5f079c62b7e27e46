"""
Profile and settings schemas.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import ConfigDict, Field

from core.domain.profile import BusinessDetails, ContentPreferences, VoiceProfile
from infrastructure.database.models import Profile

from .common import CamelModel


class ProfileUpdateRequest(CamelModel):
    """Each supplied section replaces the stored one."""

    business_details: Optional[BusinessDetails] = None
    content_prefs: Optional[ContentPreferences] = None
    voice_profile: Optional[VoiceProfile] = None


class SettingsUpdateRequest(CamelModel):
    """Provider key plus any extra non-secret settings."""

    model_config = ConfigDict(extra="allow")

    # Field name kept from the web client
    openai_key: Optional[str] = Field(None, alias="openAIKey")

    def extra_settings(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class ProfileResponse(CamelModel):
    """Profile view; the provider key itself is never returned."""

    id: str
    user_id: str
    business_details: dict[str, Any]
    content_prefs: dict[str, Any]
    voice_profile: dict[str, Any]
    settings: dict[str, Any]
    has_provider_key: bool
    provider_key_hint: Optional[str] = None
    provider_key_updated_at: Optional[datetime] = None
    onboarding_completed: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, profile: Profile, key_hint: Optional[str] = None) -> "ProfileResponse":
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            business_details=profile.business_details or {},
            content_prefs=profile.content_prefs or {},
            voice_profile=profile.voice_profile or {},
            settings=profile.settings_metadata or {},
            has_provider_key=profile.has_provider_key,
            provider_key_hint=key_hint,
            provider_key_updated_at=profile.provider_key_updated_at,
            onboarding_completed=profile.onboarding_completed,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
