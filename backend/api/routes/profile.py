"""
Profile API routes: onboarding data and provider settings.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import CurrentUserId, get_profile_store
from api.schemas.common import Envelope, MessageEnvelope, success
from api.schemas.profile import ProfileResponse, ProfileUpdateRequest, SettingsUpdateRequest
from services.profile_store import ProfileStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["Profile"])

Profiles = Annotated[ProfileStore, Depends(get_profile_store)]


def _view(store: ProfileStore, profile) -> ProfileResponse:
    credential = store.credential_of(profile)
    return ProfileResponse.from_model(profile, key_hint=credential.masked() if credential else None)


@router.get("", response_model=Envelope[ProfileResponse])
async def get_profile(user_id: CurrentUserId, store: Profiles):
    """Get the current user's profile."""
    profile = await store.get(user_id)
    return success(_view(store, profile))


@router.put("", response_model=Envelope[ProfileResponse])
async def update_profile(
    body: ProfileUpdateRequest,
    user_id: CurrentUserId,
    store: Profiles,
):
    """
    Replace the supplied profile sections.

    The onboarding flag is recomputed from the stored business details and
    voice profile after every update.
    """
    profile = await store.update(
        user_id,
        business_details=body.business_details,
        content_prefs=body.content_prefs,
        voice_profile=body.voice_profile,
    )
    return success(_view(store, profile), "Profile updated successfully")


@router.post("/settings", response_model=MessageEnvelope)
async def update_settings(
    body: SettingsUpdateRequest,
    user_id: CurrentUserId,
    store: Profiles,
):
    """Store the provider API key and merge any other settings."""
    await store.update_settings(user_id, body.openai_key, body.extra_settings())
    return {"status": "success", "message": "Settings updated successfully"}


@router.delete("/settings/provider-key", response_model=Envelope[ProfileResponse])
async def delete_provider_key(user_id: CurrentUserId, store: Profiles):
    """Remove the stored provider API key."""
    profile = await store.clear_credential(user_id)
    return success(_view(store, profile), "API key removed")
