"""
User and profile database models.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, ForeignKey, JSON, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """User account model."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    profile: Mapped[Optional["Profile"]] = relationship(
        "Profile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"


class Profile(Base, TimestampMixin):
    """Per-user business context, voice profile and provider credential."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    business_details: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    """
    Structure:
    {
        "businessName": "Acme",
        "industry": "Technology",
        "description": "We build ...",
        "targetAudience": "CTOs at mid-size companies"
    }
    """

    voice_profile: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    """
    Structure:
    {
        "writingStyle": {"formality": "neutral", "complexity": "moderate", "emotion": "neutral"},
        "writingSamples": [{"text": "...", "type": "blog"}],
        "influencers": ["Satya Nadella"]
    }
    """

    content_prefs: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    """
    Structure:
    {
        "contentTypes": {"blog": true, "linkedin": true, "twitter": false},
        "topics": ["Industry Trends"],
        "tones": ["Professional"],
        "goals": ["Brand awareness"]
    }
    """

    # Non-secret settings; the provider key is kept in its own encrypted column
    settings_metadata: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)

    provider_api_key_encrypted: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    provider_key_updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    onboarding_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="profile")

    def __repr__(self) -> str:
        return f"<Profile(user_id={self.user_id}, onboarding_completed={self.onboarding_completed})>"

    @property
    def has_provider_key(self) -> bool:
        return bool(self.provider_api_key_encrypted)
