"""Content domain types.

Generation settings and the tagged metadata records stored next to each
Content and ContentVersion row.
"""
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class ContentType(str, Enum):
    """Kinds of content the generator can produce."""
    BLOG = "blog"
    LINKEDIN = "linkedin"
    TWITTER = "twitter"


class RepeatRule(str, Enum):
    """Repeat rule recorded with a schedule."""
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class VersionSource(str, Enum):
    """What produced a ContentVersion."""
    GENERATION = "generation"
    MANUAL_EDIT = "manual-edit"
    SCHEDULE = "schedule"
    RESTORE = "restore"


class GenerationSettings(BaseModel):
    """Per-request generation settings sent by the content form."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    type: ContentType
    tone: str = Field(..., min_length=1, max_length=100)
    length: Optional[int] = Field(None, gt=0, le=5000)
    keywords: Optional[list[str]] = Field(None, max_length=50)
    target_audience: str = Field(..., alias="targetAudience", min_length=1, max_length=500)
    industry: str = Field(..., min_length=1, max_length=200)

    @field_validator("keywords")
    @classmethod
    def drop_blank_keywords(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        if v is None:
            return None
        return [k.strip() for k in v if k and k.strip()]

    def snapshot(self) -> dict:
        """JSON-ready copy using the wire field names."""
        return self.model_dump(mode="json", by_alias=True)


def _now() -> datetime:
    return datetime.now(UTC)


class GenerationMetadata(BaseModel):
    """Recorded on Content rows produced by the generator."""

    kind: Literal["generation"] = "generation"
    model: str
    settings: dict
    timestamp: datetime = Field(default_factory=_now)


class ScheduleMetadata(BaseModel):
    """Recorded on Content rows created by the schedule endpoint."""

    kind: Literal["schedule"] = "schedule"
    platforms: list[str]
    # Only present for repeating schedules
    repeat: Optional[RepeatRule] = None
    timestamp: datetime = Field(default_factory=_now)


ContentMetadata = Annotated[
    Union[GenerationMetadata, ScheduleMetadata],
    Field(discriminator="kind"),
]
content_metadata_adapter: TypeAdapter = TypeAdapter(ContentMetadata)


class VersionMetadata(BaseModel):
    """Provenance of a single ContentVersion."""

    model_config = ConfigDict(populate_by_name=True)

    source: VersionSource
    timestamp: datetime = Field(default_factory=_now)
    model: Optional[str] = None
    restored_from: Optional[int] = Field(None, alias="restoredFrom")


def dump_metadata(record: BaseModel) -> dict:
    """Serialize a metadata record for a JSON column."""
    return record.model_dump(mode="json", by_alias=True, exclude_none=True)
