"""
Schedule recorder: stores content with the date, time, repeat rule and
platforms it should go out on. Nothing here publishes anything; the
``scheduled`` status is a recorded intent.
"""

import logging
from datetime import date, datetime, time, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.content import (
    ContentType,
    RepeatRule,
    ScheduleMetadata,
    VersionMetadata,
    VersionSource,
    dump_metadata,
)
from core.exceptions import PersistenceFailed, ValidationFailed
from infrastructure.database.models import Content, ContentStatus, ContentVersion
from services.content_store import ContentStore

logger = logging.getLogger(__name__)

TITLE_FROM_BODY_LENGTH = 80


def scheduled_at(day: date, at: time) -> datetime:
    """Combine a date and a wall-clock time. Times without an offset are read as UTC."""
    combined = datetime.combine(day, at)
    if combined.tzinfo is None:
        return combined.replace(tzinfo=timezone.utc)
    return combined.astimezone(timezone.utc)


def default_title(body: str) -> str:
    first_line = body.strip().splitlines()[0] if body.strip() else ""
    return first_line[:TITLE_FROM_BODY_LENGTH].strip() or "Scheduled content"


class ScheduleRecorder:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(
        self,
        user_id: str,
        body: str,
        content_type: ContentType,
        day: date,
        at: time,
        platforms: list[str],
        repeat: RepeatRule = RepeatRule.NONE,
        title: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Content:
        """Persist a scheduled Content with version 1 in one transaction."""
        when = scheduled_at(day, at)
        now = now or datetime.now(timezone.utc)
        if when <= now:
            raise ValidationFailed(
                "Scheduled time must be in the future",
                details=[{"loc": ["scheduleSettings"], "msg": "must be in the future", "type": "value_error"}],
            )

        cleaned_platforms = [p.strip() for p in platforms if p and p.strip()]
        if not cleaned_platforms:
            raise ValidationFailed(
                "At least one platform is required",
                details=[{"loc": ["scheduleSettings", "platforms"], "msg": "must not be empty", "type": "value_error"}],
            )

        metadata = ScheduleMetadata(
            platforms=cleaned_platforms,
            repeat=repeat if repeat != RepeatRule.NONE else None,
        )
        content = Content(
            user_id=user_id,
            type=ContentType(content_type).value,
            title=(title or "").strip() or default_title(body),
            body=body,
            status=ContentStatus.SCHEDULED.value,
            scheduled_for=when,
            current_version=1,
            content_metadata=dump_metadata(metadata),
        )
        content.versions.append(
            ContentVersion(
                version=1,
                body=body,
                version_metadata=dump_metadata(VersionMetadata(source=VersionSource.SCHEDULE)),
            )
        )

        try:
            self.db.add(content)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to store scheduled content: %s", e, extra={"user_id": user_id})
            raise PersistenceFailed("Failed to schedule content") from e

        logger.info(
            "Content scheduled for %s on %s", when.isoformat(), ", ".join(cleaned_platforms),
            extra={"user_id": user_id, "content_id": content.id},
        )
        return await ContentStore(self.db).get_owned(user_id, content.id)
