"""
Pytest configuration and shared fixtures for backend tests.
"""

import sys
from pathlib import Path

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import pytest
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Import after path is set
from adapters.ai.anthropic_adapter import GeneratedText, get_content_ai_service
from core.domain.profile import ProviderCredential
from core.security import CredentialEncryption, PasswordHasher, TokenService
from infrastructure.config import get_settings
from infrastructure.database.connection import get_db
from infrastructure.database.models import Base, Profile, User

# Fewer bcrypt rounds keep fixture setup fast
password_hasher = PasswordHasher(rounds=4)
settings = get_settings()
token_service = TokenService(
    secret_key=settings.jwt_secret_key,
    algorithm=settings.jwt_algorithm,
)
encryption = CredentialEncryption(settings.secret_key)

TEST_PASSWORD = "testpassword123"
TEST_API_KEY = "sk-ant-REDACTED"

# Database URL for testing (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session
        await session.rollback()


async def _create_user(db_session: AsyncSession, email: str) -> User:
    user = User(
        id=str(uuid4()),
        email=email,
        password_hash=password_hasher.hash(TEST_PASSWORD),
    )
    user.profile = Profile()
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def _bearer(user: User) -> dict:
    access_token = token_service.create_access_token(user_id=user.id, email=user.email)
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user with an empty profile."""
    return await _create_user(db_session, "test@example.com")


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Generate authentication headers for test user."""
    return _bearer(test_user)


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    """
    Create a second test user for permission testing.

    Used for testing that users cannot access each other's content.
    """
    return await _create_user(db_session, "other@example.com")


@pytest.fixture
def other_auth_headers(other_user: User) -> dict:
    return _bearer(other_user)


BUSINESS_DETAILS = {
    "businessName": "Acme Analytics",
    "industry": "Technology",
    "description": "We build dashboards for small retailers",
    "targetAudience": "Store owners",
}

VOICE_PROFILE = {
    "writingStyle": {"formality": "neutral", "complexity": "moderate", "emotion": "passionate"},
    "writingSamples": [],
    "influencers": [],
}


@pytest.fixture
async def onboarded_profile(db_session: AsyncSession, test_user: User) -> Profile:
    """Complete the test user's profile and store a provider key."""
    profile = test_user.profile
    profile.business_details = dict(BUSINESS_DETAILS)
    profile.voice_profile = dict(VOICE_PROFILE)
    profile.onboarding_completed = True
    profile.provider_api_key_encrypted = encryption.seal(ProviderCredential(api_key=TEST_API_KEY))
    await db_session.commit()
    await db_session.refresh(profile)
    return profile


@pytest.fixture
def generation_settings() -> dict:
    return {
        "type": "twitter",
        "tone": "Professional",
        "targetAudience": "devs",
        "industry": "Tech",
    }


@pytest.fixture
def ai_service() -> MagicMock:
    """Generation provider double returning a fixed text."""
    service = MagicMock()
    service.model = "claude-test"
    service.generate_text = AsyncMock(
        return_value=GeneratedText(content="Generated post about AI trends #ai", model="claude-test")
    )
    return service


@pytest.fixture
async def async_client(
    db_session: AsyncSession,
    ai_service: MagicMock,
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    # Import app here to avoid circular imports
    from main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_content_ai_service] = lambda: ai_service

    # Reset rate limiter state between tests to prevent cross-test 429s
    app.state.limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
