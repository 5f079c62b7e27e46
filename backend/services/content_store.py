"""
Content store: ownership-scoped CRUD over generated content and its
append-only version history.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.content import VersionMetadata, VersionSource, dump_metadata
from core.exceptions import PersistenceFailed, ResourceNotFound, ValidationFailed
from infrastructure.database.models import Content, ContentStatus, ContentVersion

logger = logging.getLogger(__name__)

CONTENT_NOT_FOUND = "Content not found"
SORT_CREATED = "created"
SORT_SCHEDULED = "scheduled"


def normalize_id(value: str) -> Optional[str]:
    """Canonical form of a UUID string, or None when it is not a UUID."""
    try:
        return str(uuid.UUID(str(value)))
    except (ValueError, AttributeError):
        return None


def parse_status(status: Optional[str]) -> Optional[ContentStatus]:
    if status is None or status == "":
        return None
    try:
        return ContentStatus(status)
    except ValueError:
        allowed = ", ".join(s.value for s in ContentStatus)
        raise ValidationFailed(
            f"Invalid status filter '{status}'. Allowed: {allowed}",
            details=[{"loc": ["query", "status"], "msg": f"must be one of {allowed}", "type": "enum"}],
        )


class ContentStore:
    """All queries are scoped to the requesting user."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(
        self,
        user_id: str,
        status: Optional[str] = None,
        sort: str = SORT_CREATED,
    ) -> list[Content]:
        """List the user's content, optionally filtered by status."""
        query = select(Content).where(Content.user_id == user_id)

        status_filter = parse_status(status)
        if status_filter is not None:
            query = query.where(Content.status == status_filter.value)

        if sort == SORT_SCHEDULED:
            query = query.order_by(
                Content.scheduled_for.asc().nulls_last(),
                Content.created_at.desc(),
            )
        elif sort == SORT_CREATED:
            query = query.order_by(Content.created_at.desc())
        else:
            raise ValidationFailed(
                f"Invalid sort '{sort}'. Allowed: {SORT_CREATED}, {SORT_SCHEDULED}",
                details=[{"loc": ["query", "sort"], "msg": "must be created or scheduled", "type": "enum"}],
            )

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_owned(self, user_id: str, content_id: str) -> Content:
        """
        Fetch one content item owned by the user.

        A malformed id, a missing row and a row owned by someone else all
        raise the same ResourceNotFound.
        """
        normalized = normalize_id(content_id)
        if normalized is None:
            raise ResourceNotFound(CONTENT_NOT_FOUND)

        result = await self.db.execute(
            select(Content)
            .where(Content.id == normalized, Content.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        content = result.scalar_one_or_none()
        if content is None:
            raise ResourceNotFound(CONTENT_NOT_FOUND)
        return content

    async def update_body(
        self,
        user_id: str,
        content_id: str,
        body: str,
        title: Optional[str] = None,
        source: VersionSource = VersionSource.MANUAL_EDIT,
        restored_from: Optional[int] = None,
    ) -> Content:
        """
        Replace the body and append the matching version in one transaction.

        The version number comes from an atomic increment of
        ``current_version`` on the owned row, so concurrent edits receive
        distinct numbers; the unique (content_id, version) constraint backs
        this up.
        """
        if not body or not body.strip():
            raise ValidationFailed(
                "Content is required",
                details=[{"loc": ["body", "content"], "msg": "must not be empty", "type": "value_error"}],
            )

        normalized = normalize_id(content_id)
        if normalized is None:
            raise ResourceNotFound(CONTENT_NOT_FOUND)

        values = {"body": body, "current_version": Content.current_version + 1}
        if title is not None and title.strip():
            values["title"] = title.strip()

        try:
            result = await self.db.execute(
                update(Content)
                .where(Content.id == normalized, Content.user_id == user_id)
                .values(**values)
                .returning(Content.current_version)
                .execution_options(synchronize_session=False)
            )
            new_version = result.scalar_one_or_none()
            if new_version is None:
                raise ResourceNotFound(CONTENT_NOT_FOUND)

            self.db.add(
                ContentVersion(
                    content_id=normalized,
                    version=new_version,
                    body=body,
                    version_metadata=dump_metadata(
                        VersionMetadata(source=source, restored_from=restored_from)
                    ),
                )
            )
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(
                "Version number conflict while updating content: %s", e.orig,
                extra={"user_id": user_id, "content_id": normalized},
            )
            raise PersistenceFailed("Failed to update content") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "Failed to update content: %s", e,
                extra={"user_id": user_id, "content_id": normalized},
            )
            raise PersistenceFailed("Failed to update content") from e

        logger.info(
            "Content updated to version %d (%s)", new_version, source.value,
            extra={"user_id": user_id, "content_id": normalized},
        )
        return await self.get_owned(user_id, normalized)

    async def delete(self, user_id: str, content_id: str) -> str:
        """Delete an owned content item together with its versions."""
        content = await self.get_owned(user_id, content_id)
        content_id = content.id
        try:
            # ORM cascade removes the versions as well
            await self.db.delete(content)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to delete content: %s", e, extra={"content_id": content_id})
            raise PersistenceFailed("Failed to delete content") from e

        logger.info("Content deleted", extra={"user_id": user_id, "content_id": content_id})
        return content_id

    async def list_versions(self, user_id: str, content_id: str) -> list[ContentVersion]:
        content = await self.get_owned(user_id, content_id)
        return list(content.versions)

    async def get_version(self, user_id: str, content_id: str, version: int) -> ContentVersion:
        content = await self.get_owned(user_id, content_id)
        for item in content.versions:
            if item.version == version:
                return item
        raise ResourceNotFound("Version not found")

    async def restore_version(self, user_id: str, content_id: str, version: int) -> Content:
        """Append a new version whose body is a copy of an earlier one."""
        target = await self.get_version(user_id, content_id, version)
        return await self.update_body(
            user_id,
            content_id,
            target.body,
            source=VersionSource.RESTORE,
            restored_from=target.version,
        )
