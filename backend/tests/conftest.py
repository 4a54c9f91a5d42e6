"""
Pytest configuration and fixtures for FlexHub tests.
"""
import os
import tempfile
from typing import AsyncGenerator

# Settings are read at import time, so the environment comes first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("AUTH_PROVIDER_SECRET", "test-provider-secret")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("STORAGE_PROVIDER", "local")
os.environ.setdefault("LOCAL_STORAGE_PATH", tempfile.mkdtemp(prefix="flexhub-test-"))
os.environ.setdefault("CORS_ORIGINS", "http://admin.example.com")
os.environ.setdefault("YOUTUBE_API_KEY", "")

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import flexhub.integrations.storage as storage_module
from flexhub.core.security import create_user_token
from flexhub.database import get_db
from flexhub.integrations.storage import LocalStorageClient
from flexhub.integrations.youtube import ChannelStats, get_youtube_client
from flexhub.models import Base, FEATURE_DEFINITIONS, FeatureType, Site, SiteFeature, User, UserRole

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


# ============================================================================
# Integration Fakes
# ============================================================================

class FakeYouTubeClient:
    """Stands in for the YouTube Data API; `channels` maps ids to stats."""

    def __init__(self):
        self.channels: dict[str, ChannelStats] = {}
        self.calls: list[str] = []
        self.available = True

    def add_channel(self, channel_id: str, name: str = "Test Channel", subscribers: str = "1500000") -> ChannelStats:
        stats = ChannelStats(
            channel_id=channel_id,
            channel_name=name,
            subscriber_count=subscribers,
            total_views="12345",
            video_count="42",
            thumbnail_url=f"https://yt.example.com/{channel_id}.jpg",
            channel_url=f"https://www.youtube.com/channel/{channel_id}",
            description="All about tests",
        )
        self.channels[channel_id] = stats
        return stats

    async def get_channel_stats(self, channel_id: str) -> ChannelStats | None:
        self.calls.append(channel_id)
        if not self.available:
            return None
        return self.channels.get(channel_id)

    async def validate_channel_id(self, channel_id: str) -> bool:
        return await self.get_channel_stats(channel_id) is not None


@pytest.fixture
def youtube() -> FakeYouTubeClient:
    return FakeYouTubeClient()


@pytest.fixture
def storage(tmp_path, monkeypatch) -> LocalStorageClient:
    """Local storage rooted in a per-test directory."""
    client = LocalStorageClient(base_path=str(tmp_path / "storage"), base_url="/files")
    monkeypatch.setattr(storage_module, "_default_client", client)
    return client


# ============================================================================
# FastAPI App Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def app(db_session: AsyncSession, youtube: FakeYouTubeClient, storage: LocalStorageClient) -> FastAPI:
    """Create test FastAPI application."""
    from flexhub.main import app as main_app

    async def override_get_db():
        yield db_session

    main_app.dependency_overrides[get_db] = override_get_db
    main_app.dependency_overrides[get_youtube_client] = lambda: youtube

    yield main_app

    main_app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client. Unhandled errors come back as 500 responses."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ============================================================================
# Data Fixtures
# ============================================================================

async def create_user(db: AsyncSession, email: str, role: UserRole = UserRole.USER, **kwargs) -> User:
    user = User(email=email, name=email.split("@")[0].title(), role=role, is_active=True, **kwargs)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def create_site(db: AsyncSession, name: str, members: list[User] = (), **kwargs) -> Site:
    site = Site(name=name, **kwargs)
    site.users = list(members)
    db.add(site)
    await db.commit()
    await db.refresh(site)
    return site


@pytest.fixture
def make_user(db_session: AsyncSession):
    """Factory: `await make_user(email, role, **columns)`."""

    async def factory(email: str, role: UserRole = UserRole.USER, **kwargs) -> User:
        return await create_user(db_session, email, role, **kwargs)

    return factory


@pytest.fixture
def make_site(db_session: AsyncSession):
    """Factory: `await make_site(name, members, **columns)`."""

    async def factory(name: str, members: list[User] = (), **kwargs) -> Site:
        return await create_site(db_session, name, members, **kwargs)

    return factory


@pytest.fixture
def enable_feature(db_session: AsyncSession):
    """Factory: `await enable_feature(site, FeatureType.X, enabled=True)`."""

    async def factory(site: Site, feature: FeatureType, enabled: bool = True) -> SiteFeature:
        site_feature = SiteFeature(
            site_id=site.id,
            feature=feature,
            is_enabled=enabled,
            display_name=FEATURE_DEFINITIONS[feature]["display_name"],
            description=FEATURE_DEFINITIONS[feature]["description"],
        )
        db_session.add(site_feature)
        await db_session.commit()
        return site_feature

    return factory


@pytest.fixture
def auth_headers():
    """Bearer header carrying a session token for a user."""

    def headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_user_token(user)}"}

    return headers


@pytest_asyncio.fixture
async def super_admin(db_session: AsyncSession) -> User:
    return await create_user(db_session, "root@example.com", UserRole.SUPERADMIN)


@pytest_asyncio.fixture
async def admin(db_session: AsyncSession) -> User:
    return await create_user(db_session, "admin@example.com", UserRole.ADMIN)


@pytest_asyncio.fixture
async def member(db_session: AsyncSession) -> User:
    return await create_user(db_session, "member@example.com", UserRole.USER)


@pytest_asyncio.fixture
async def outsider(db_session: AsyncSession) -> User:
    return await create_user(db_session, "outsider@example.com", UserRole.USER)


@pytest_asyncio.fixture
async def site(db_session: AsyncSession, admin: User, member: User) -> Site:
    """A site with `admin` and `member` as members."""
    return await create_site(db_session, "Test Site", [admin, member], domain="example.com")
