"""
Profile store: business context, voice profile, content preferences and
the encrypted provider credential of each user.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.profile import (
    BusinessDetails,
    ContentPreferences,
    ProviderCredential,
    VoiceProfile,
    onboarding_complete,
)
from core.exceptions import ResourceNotFound, ValidationFailed
from core.security.encryption import CredentialEncryption
from infrastructure.config.settings import settings
from infrastructure.database.models import Profile

logger = logging.getLogger(__name__)

INVALID_KEY_MESSAGE = "Invalid API key format"


def validate_provider_key(api_key: Optional[str]) -> ProviderCredential:
    """Check the shape of a provider API key and wrap it."""
    if not isinstance(api_key, str):
        raise ValidationFailed(INVALID_KEY_MESSAGE)
    api_key = api_key.strip()
    if (
        not api_key.startswith(settings.provider_key_prefix)
        or len(api_key) < settings.provider_key_min_length
    ):
        raise ValidationFailed(INVALID_KEY_MESSAGE)
    return ProviderCredential(api_key=api_key)


class ProfileStore:
    """Reads and writes the profile owned by a user."""

    def __init__(self, db: AsyncSession, encryption: Optional[CredentialEncryption] = None):
        self.db = db
        self.encryption = encryption or CredentialEncryption(settings.secret_key)

    async def find(self, user_id: str) -> Optional[Profile]:
        result = await self.db.execute(select(Profile).where(Profile.user_id == user_id))
        return result.scalar_one_or_none()

    async def get(self, user_id: str) -> Profile:
        """Return the user's profile or raise ResourceNotFound."""
        profile = await self.find(user_id)
        if profile is None:
            raise ResourceNotFound("Profile not found")
        return profile

    async def update(
        self,
        user_id: str,
        business_details: Optional[BusinessDetails] = None,
        content_prefs: Optional[ContentPreferences] = None,
        voice_profile: Optional[VoiceProfile] = None,
    ) -> Profile:
        """
        Replace the supplied profile sections and recompute the onboarding flag.

        Sections passed as None are left untouched.
        """
        profile = await self.get(user_id)

        if business_details is not None:
            profile.business_details = business_details.model_dump(by_alias=True)
        if content_prefs is not None:
            profile.content_prefs = content_prefs.model_dump(mode="json", by_alias=True)
        if voice_profile is not None:
            profile.voice_profile = voice_profile.model_dump(mode="json", by_alias=True)

        was_completed = profile.onboarding_completed
        profile.onboarding_completed = onboarding_complete(
            self.business_details(profile), self.voice_profile(profile)
        )

        await self.db.commit()
        await self.db.refresh(profile)

        if profile.onboarding_completed and not was_completed:
            logger.info("Onboarding completed", extra={"user_id": user_id})
        return profile

    async def update_settings(
        self,
        user_id: str,
        api_key: Optional[str],
        extra: Optional[dict[str, Any]] = None,
    ) -> Profile:
        """Store a new provider credential and merge the remaining settings."""
        credential = validate_provider_key(api_key)
        profile = await self.get(user_id)

        profile.provider_api_key_encrypted = self.encryption.seal(credential)
        profile.provider_key_updated_at = datetime.now(timezone.utc)
        if extra:
            profile.settings_metadata = {**(profile.settings_metadata or {}), **extra}

        await self.db.commit()
        await self.db.refresh(profile)
        logger.info("Provider credential updated", extra={"user_id": user_id})
        return profile

    async def clear_credential(self, user_id: str) -> Profile:
        profile = await self.get(user_id)
        profile.provider_api_key_encrypted = None
        profile.provider_key_updated_at = datetime.now(timezone.utc)
        await self.db.commit()
        await self.db.refresh(profile)
        logger.info("Provider credential removed", extra={"user_id": user_id})
        return profile

    def credential_of(self, profile: Profile) -> Optional[ProviderCredential]:
        """Decrypt the credential stored on a loaded profile."""
        return self.encryption.open(profile.provider_api_key_encrypted)

    async def get_credential(self, user_id: str) -> Optional[ProviderCredential]:
        """Return the user's provider credential, or None when none is usable."""
        profile = await self.find(user_id)
        if profile is None:
            return None
        return self.credential_of(profile)

    @staticmethod
    def business_details(profile: Profile) -> BusinessDetails:
        return BusinessDetails.model_validate(profile.business_details or {})

    @staticmethod
    def voice_profile(profile: Profile) -> VoiceProfile:
        return VoiceProfile.model_validate(profile.voice_profile or {})
