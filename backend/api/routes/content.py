"""
Content API routes: generation, listing, editing, version history and
scheduling.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies import (
    CurrentUserId,
    get_content_generator,
    get_content_store,
    get_schedule_recorder,
)
from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.common import DeletedResponse, Envelope, success
from api.schemas.content import (
    ContentResponse,
    ContentUpdateRequest,
    ContentVersionResponse,
    GenerateRequest,
    ScheduleRequest,
)
from services.content_generator import ContentGenerator
from services.content_store import SORT_CREATED, ContentStore
from services.schedule_recorder import ScheduleRecorder

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["Content"])

Store = Annotated[ContentStore, Depends(get_content_store)]


@router.get("", response_model=Envelope[list[ContentResponse]])
async def list_content(
    user_id: CurrentUserId,
    store: Store,
    status_filter: Optional[str] = Query(None, alias="status"),
    sort: str = Query(SORT_CREATED),
):
    """List the current user's content with versions."""
    items = await store.list_for_user(user_id, status=status_filter, sort=sort)
    return success([ContentResponse.from_model(item) for item in items])


@router.post("/generate", response_model=Envelope[ContentResponse], status_code=status.HTTP_201_CREATED)
@limiter.limit(get_rate_limit("generate"))
async def generate_content(
    request: Request,
    body: GenerateRequest,
    user_id: CurrentUserId,
    generator: Annotated[ContentGenerator, Depends(get_content_generator)],
):
    """Generate content from a topic and settings and store it as a draft."""
    content = await generator.generate(body.topic, body.settings, user_id)
    return success(ContentResponse.from_model(content), "Content generated successfully")


@router.post("/schedule", response_model=Envelope[ContentResponse], status_code=status.HTTP_201_CREATED)
async def schedule_content(
    body: ScheduleRequest,
    user_id: CurrentUserId,
    recorder: Annotated[ScheduleRecorder, Depends(get_schedule_recorder)],
):
    """Record content to be published later. Nothing is published by this service."""
    settings = body.schedule_settings
    content = await recorder.record(
        user_id,
        body=body.content,
        content_type=body.type,
        day=settings.date,
        at=settings.time,
        platforms=settings.platforms,
        repeat=settings.repeat,
        title=body.title,
    )
    return success(ContentResponse.from_model(content), "Content scheduled successfully")


@router.get("/{content_id}", response_model=Envelope[ContentResponse])
async def get_content(content_id: str, user_id: CurrentUserId, store: Store):
    content = await store.get_owned(user_id, content_id)
    return success(ContentResponse.from_model(content))


@router.put("/{content_id}", response_model=Envelope[ContentResponse])
async def update_content(
    content_id: str,
    body: ContentUpdateRequest,
    user_id: CurrentUserId,
    store: Store,
):
    """Replace the body and append a manual-edit version."""
    content = await store.update_body(user_id, content_id, body.content, title=body.title)
    return success(ContentResponse.from_model(content), "Content updated successfully")


@router.delete("/{content_id}", response_model=Envelope[DeletedResponse])
async def delete_content(content_id: str, user_id: CurrentUserId, store: Store):
    """Delete a content item and its version history."""
    deleted_id = await store.delete(user_id, content_id)
    return success(DeletedResponse(id=deleted_id), "Content deleted successfully")


@router.get("/{content_id}/versions", response_model=Envelope[list[ContentVersionResponse]])
async def list_versions(content_id: str, user_id: CurrentUserId, store: Store):
    """Version history, newest first."""
    versions = await store.list_versions(user_id, content_id)
    return success([ContentVersionResponse.from_model(v) for v in versions])


@router.get("/{content_id}/versions/{version}", response_model=Envelope[ContentVersionResponse])
async def get_version(content_id: str, version: int, user_id: CurrentUserId, store: Store):
    item = await store.get_version(user_id, content_id, version)
    return success(ContentVersionResponse.from_model(item))


@router.post("/{content_id}/versions/{version}/restore", response_model=Envelope[ContentResponse])
async def restore_version(content_id: str, version: int, user_id: CurrentUserId, store: Store):
    """Restore an earlier version by appending a copy of it as the newest version."""
    content = await store.restore_version(user_id, content_id, version)
    return success(ContentResponse.from_model(content), "Version restored successfully")
