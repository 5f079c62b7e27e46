"""
Content generation: validate the request, assemble the prompt from the
user's profile, call the provider and persist the result as version 1.
"""

import logging
import time
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.ai.anthropic_adapter import AnthropicContentService
from core.domain.content import (
    GenerationMetadata,
    GenerationSettings,
    VersionMetadata,
    VersionSource,
    dump_metadata,
)
from core.exceptions import CredentialMissing, PersistenceFailed, ValidationFailed
from infrastructure.database.models import Content, ContentStatus, ContentVersion
from services.content_store import ContentStore
from services.profile_store import ProfileStore
from services.prompt_assembler import TOPIC_MAX_LENGTH, build_prompt

logger = logging.getLogger(__name__)


def validation_details(error: ValidationError, prefix: tuple = ()) -> list[dict]:
    """Flatten pydantic errors into the ``details`` list of the error envelope."""
    return [
        {"loc": [*prefix, *err["loc"]], "msg": err["msg"], "type": err["type"]}
        for err in error.errors()
    ]


def validate_generation_request(topic: Any, settings: Any) -> tuple[str, GenerationSettings]:
    """Validate topic and settings; raise ValidationFailed listing every problem."""
    details: list[dict] = []

    if not isinstance(topic, str) or not topic.strip():
        details.append({"loc": ["topic"], "msg": "Topic is required", "type": "missing"})
    elif len(topic.strip()) > TOPIC_MAX_LENGTH:
        details.append({
            "loc": ["topic"],
            "msg": f"Topic must be at most {TOPIC_MAX_LENGTH} characters",
            "type": "string_too_long",
        })

    parsed = None
    if isinstance(settings, GenerationSettings):
        parsed = settings
    else:
        try:
            parsed = GenerationSettings.model_validate(settings if settings is not None else {})
        except ValidationError as e:
            details.extend(validation_details(e, prefix=("settings",)))

    if details or parsed is None:
        raise ValidationFailed(details=details)
    return topic.strip(), parsed


class ContentGenerator:
    """Turns a topic plus settings into a stored draft."""

    def __init__(
        self,
        db: AsyncSession,
        ai_service: AnthropicContentService,
        profiles: ProfileStore | None = None,
    ):
        self.db = db
        self.ai_service = ai_service
        self.profiles = profiles or ProfileStore(db)

    async def generate(self, topic: Any, settings: Any, user_id: str) -> Content:
        """
        Generate and store one content item.

        Raises:
            ValidationFailed: bad topic/settings or an incomplete profile
            ResourceNotFound: the user has no profile
            CredentialMissing: no provider API key stored
            UnsupportedContentType: unknown content type
            UpstreamGenerationFailed: the provider call failed
            PersistenceFailed: the result could not be stored
        """
        topic, parsed = validate_generation_request(topic, settings)

        profile = await self.profiles.get(user_id)

        credential = await self.profiles.get_credential(user_id)
        if credential is None:
            raise CredentialMissing()

        business = ProfileStore.business_details(profile)
        voice = ProfileStore.voice_profile(profile)
        missing = []
        if not business.business_name:
            missing.append("businessName")
        if not business.description:
            missing.append("description")
        if voice.writing_style is None:
            missing.append("writingStyle")
        if missing:
            raise ValidationFailed("Profile incomplete", details={"missing": missing})

        prompt = build_prompt(parsed.type, topic, business, voice, parsed)

        logger.info(
            "Generating %s content", parsed.type.value,
            extra={"user_id": user_id},
        )
        started = time.monotonic()
        generated = await self.ai_service.generate_text(prompt, credential.api_key)
        duration_ms = int((time.monotonic() - started) * 1000)

        content = Content(
            user_id=user_id,
            type=parsed.type.value,
            title=topic,
            body=generated.content,
            status=ContentStatus.DRAFT.value,
            current_version=1,
            content_metadata=dump_metadata(
                GenerationMetadata(model=generated.model, settings=parsed.snapshot())
            ),
        )
        content.versions.append(
            ContentVersion(
                version=1,
                body=generated.content,
                version_metadata=dump_metadata(
                    VersionMetadata(source=VersionSource.GENERATION, model=generated.model)
                ),
            )
        )

        try:
            self.db.add(content)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to store generated content: %s", e, extra={"user_id": user_id})
            raise PersistenceFailed() from e

        logger.info(
            "Generated content stored (%d ms)", duration_ms,
            extra={"user_id": user_id, "content_id": content.id, "duration_ms": duration_ms},
        )
        return await ContentStore(self.db).get_owned(user_id, content.id)
