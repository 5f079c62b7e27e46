"""
SQLAlchemy database models.
"""

from .base import Base, TimestampMixin
from .content import Content, ContentStatus, ContentType, ContentVersion
from .user import Profile, User

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "Profile",
    "Content",
    "ContentVersion",
    "ContentStatus",
    "ContentType",
]
