"""
Content database models: generated artifacts and their version history.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.domain.content import ContentType  # noqa: F401  re-exported

from .base import Base, TimestampMixin, utcnow


class ContentStatus(str, Enum):
    """Content status enumeration."""

    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"


class Content(Base, TimestampMixin):
    """One generated (or scheduled) piece of content."""

    __tablename__ = "contents"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Owner, never reassigned
    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    type: Mapped[str] = mapped_column(String(20), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        default=ContentStatus.DRAFT.value,
        nullable=False,
    )
    scheduled_for: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Number of the latest ContentVersion; bumped atomically on every edit
    current_version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    content_metadata: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    """
    Either a generation record:
        {"kind": "generation", "model": "...", "settings": {...}, "timestamp": "..."}
    or a schedule record:
        {"kind": "schedule", "platforms": ["linkedin"], "repeat": "weekly", "timestamp": "..."}
    """

    versions: Mapped[List["ContentVersion"]] = relationship(
        "ContentVersion",
        back_populates="content",
        cascade="all, delete-orphan",
        order_by="ContentVersion.version.desc()",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_contents_user_created", "user_id", "created_at"),
        Index("ix_contents_user_status", "user_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Content(id={self.id}, type={self.type}, status={self.status})>"


class ContentVersion(Base):
    """Append-only snapshot of a Content body."""

    __tablename__ = "content_versions"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    content_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("contents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    version_metadata: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    content: Mapped["Content"] = relationship("Content", back_populates="versions")

    __table_args__ = (
        UniqueConstraint("content_id", "version", name="uq_content_versions_content_version"),
        CheckConstraint("version > 0", name="ck_content_versions_version_positive"),
    )

    def __repr__(self) -> str:
        return f"<ContentVersion(content_id={self.content_id}, version={self.version})>"
