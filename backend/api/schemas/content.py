"""
Content API schemas: generation, editing, versions and scheduling.
"""

import datetime as dt
from typing import Any, Optional

from pydantic import Field, field_validator

from core.domain.content import ContentType, RepeatRule
from infrastructure.database.models import Content, ContentVersion

from .common import CamelModel


class GenerateRequest(CamelModel):
    """
    Generation request. Topic and settings are checked by the generator so
    that every problem is reported in one ``details`` list.
    """

    topic: Any = None
    settings: Any = None


class ContentUpdateRequest(CamelModel):
    content: str = Field(..., max_length=100000)
    title: Optional[str] = Field(None, max_length=500)


class ScheduleSettings(CamelModel):
    date: dt.date
    time: dt.time
    repeat: RepeatRule = RepeatRule.NONE
    platforms: list[str] = Field(..., min_length=1, max_length=20)

    @field_validator("platforms")
    @classmethod
    def non_blank_platforms(cls, v: list[str]) -> list[str]:
        cleaned = [p.strip() for p in v if p and p.strip()]
        if not cleaned:
            raise ValueError("At least one platform is required")
        return cleaned


class ScheduleRequest(CamelModel):
    content: str = Field(..., min_length=1, max_length=100000)
    type: ContentType
    title: Optional[str] = Field(None, max_length=500)
    schedule_settings: ScheduleSettings


class ContentVersionResponse(CamelModel):
    id: str
    content_id: str
    version: int
    content: str
    metadata: dict[str, Any]
    created_at: dt.datetime

    @classmethod
    def from_model(cls, version: ContentVersion) -> "ContentVersionResponse":
        return cls(
            id=version.id,
            content_id=version.content_id,
            version=version.version,
            content=version.body,
            metadata=version.version_metadata or {},
            created_at=version.created_at,
        )


class ContentResponse(CamelModel):
    """A content item with its versions, newest first."""

    id: str
    user_id: str
    type: str
    title: str
    content: str
    status: str
    scheduled_for: Optional[dt.datetime] = None
    current_version: int
    metadata: dict[str, Any]
    created_at: dt.datetime
    updated_at: dt.datetime
    versions: list[ContentVersionResponse] = Field(default_factory=list)

    @classmethod
    def from_model(cls, content: Content) -> "ContentResponse":
        return cls(
            id=content.id,
            user_id=content.user_id,
            type=content.type,
            title=content.title,
            content=content.body,
            status=content.status,
            scheduled_for=content.scheduled_for,
            current_version=content.current_version,
            metadata=content.content_metadata or {},
            created_at=content.created_at,
            updated_at=content.updated_at,
            versions=[
                ContentVersionResponse.from_model(v)
                for v in sorted(content.versions, key=lambda v: v.version, reverse=True)
            ],
        )
