"""
Authentication API routes.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import CurrentUserId, token_service
from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest, UserResponse
from api.schemas.common import Envelope, success
from core.exceptions import ConflictError, InvalidCredentials, ResourceNotFound
from core.security.password import password_hasher
from infrastructure.database.connection import get_db
from infrastructure.database.models import Profile, User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

# Verified against when the email is unknown so both failure paths cost one bcrypt check
_DUMMY_HASH = "$2b$12$WmDNGEj9s7YLV5sV/N7aBOpWL0.T5.R5ZQOeKHNlLB.d7WN4HFXIC"


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        user=UserResponse(id=user.id, email=user.email),
        token=token_service.create_access_token(user.id, user.email),
        expires_in=token_service.expires_in,
    )


@router.post(
    "/register",
    response_model=Envelope[AuthResponse],
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(get_rate_limit("register"))
async def register(
    request: Request,
    register_data: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new user account together with an empty profile.
    """
    result = await db.execute(select(User.id).where(User.email == register_data.email))
    if result.scalar_one_or_none():
        raise ConflictError("User already exists")

    user = User(
        email=register_data.email,
        password_hash=password_hasher.hash(register_data.password),
    )
    user.profile = Profile()
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email
        await db.rollback()
        raise ConflictError("User already exists") from e

    logger.info("User registered", extra={"user_id": user.id})
    return success(_auth_response(user), "User registered successfully")


@router.post("/login", response_model=Envelope[AuthResponse])
@limiter.limit(get_rate_limit("login"))
async def login(
    request: Request,
    login_data: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Authenticate with email and password and return a bearer token.
    """
    result = await db.execute(select(User).where(User.email == login_data.email.lower()))
    user = result.scalar_one_or_none()

    password_ok, new_hash = password_hasher.verify_and_update(
        login_data.password,
        user.password_hash if user else _DUMMY_HASH,
    )
    if not user or not password_ok:
        raise InvalidCredentials()

    if new_hash:
        user.password_hash = new_hash
        await db.commit()

    return success(_auth_response(user), "Login successful")


@router.get("/me", response_model=Envelope[MeResponse])
async def get_me(
    user_id: CurrentUserId,
    db: AsyncSession = Depends(get_db),
):
    """Return the authenticated user."""
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise ResourceNotFound("User not found")

    return success(
        MeResponse(
            id=user.id,
            email=user.email,
            onboarding_completed=bool(user.profile and user.profile.onboarding_completed),
        )
    )
