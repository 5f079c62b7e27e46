"""
API dependencies for authentication and service wiring.
"""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.ai.anthropic_adapter import AnthropicContentService, get_content_ai_service
from core.exceptions import AuthenticationInvalid, AuthenticationMissing
from core.security.tokens import TokenService
from infrastructure.config.settings import settings
from infrastructure.database.connection import get_db
from services.content_generator import ContentGenerator
from services.content_store import ContentStore
from services.profile_store import ProfileStore
from services.schedule_recorder import ScheduleRecorder

token_service = TokenService(
    secret_key=settings.jwt_secret_key,
    algorithm=settings.jwt_algorithm,
    access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


async def get_current_user_id(
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """
    Dependency resolving the authenticated user id from the bearer token.

    A missing or empty token is AuthenticationMissing (401); a token that
    fails signature, expiry or type checks is AuthenticationInvalid (403).
    No database access.
    """
    token = extract_bearer_token(authorization)
    if not token:
        raise AuthenticationMissing()

    payload = token_service.verify_access_token(token)
    if payload is None:
        raise AuthenticationInvalid()

    return payload.sub


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
DbSession = Annotated[AsyncSession, Depends(get_db)]


def get_profile_store(db: DbSession) -> ProfileStore:
    return ProfileStore(db)


def get_content_store(db: DbSession) -> ContentStore:
    return ContentStore(db)


def get_schedule_recorder(db: DbSession) -> ScheduleRecorder:
    return ScheduleRecorder(db)


def get_content_generator(
    db: DbSession,
    ai_service: Annotated[AnthropicContentService, Depends(get_content_ai_service)],
) -> ContentGenerator:
    return ContentGenerator(db, ai_service)
