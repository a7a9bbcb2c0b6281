"""Shared fixtures for unit tests.

Provides an in-memory SQLite database with every table created, a settings
store backed by a temporary directory, a seeded owner account and an
in-process metadata provider.
"""

from __future__ import annotations

from typing import AsyncGenerator, Dict, Tuple

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

from seerr.core.database import create_all
from seerr.core.database.entities import User, UserType
from seerr.core.database.repositories import UserRepository
from seerr.core.permissions import Permission
from seerr.core.settings import SettingsStore, set_settings
from seerr.providers import MediaDetails, MediaNotFoundError, MetadataProvider, clear_cache

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_API_KEY = "test-api-key"


class FakeMetadataProvider(MetadataProvider):
    """Serves MediaDetails registered with ``add``; unknown ids raise MediaNotFoundError."""

    name = "fake"

    def __init__(self) -> None:
        self.details: Dict[Tuple[str, int], MediaDetails] = {}
        self.closed = 0

    def add(self, details: MediaDetails) -> MediaDetails:
        self.details[(details.media_type.value, details.id)] = details
        return details

    async def get_movie(self, movie_id: int) -> MediaDetails:
        try:
            return self.details[("movie", movie_id)]
        except KeyError:
            raise MediaNotFoundError("movie", movie_id)

    async def get_tv_show(self, tv_id: int) -> MediaDetails:
        try:
            return self.details[("tv", tv_id)]
        except KeyError:
            raise MediaNotFoundError("tv", tv_id)

    async def close(self) -> None:
        self.closed += 1


@pytest.fixture(autouse=True)
def _clear_metadata_cache():
    """Metadata responses are cached per process; start every test empty."""
    clear_cache()
    yield
    clear_cache()


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(engine) -> AsyncGenerator[AsyncSession, None]:
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session


@pytest.fixture
def store(tmp_path) -> SettingsStore:
    """Settings store with one default Radarr (HD and 4K) and one default Sonarr instance."""
    store = SettingsStore(
        tmp_path / "settings.json",
        initial={
            "main": {"apiKey": TEST_API_KEY},
            "radarr": [
                {
                    "id": 0,
                    "name": "Radarr",
                    "isDefault": True,
                    "is4k": False,
                    "activeProfileId": 1,
                    "activeDirectory": "/movies",
                },
                {
                    "id": 1,
                    "name": "Radarr 4K",
                    "isDefault": True,
                    "is4k": True,
                    "activeProfileId": 5,
                    "activeDirectory": "/movies-4k",
                },
            ],
            "sonarr": [
                {
                    "id": 0,
                    "name": "Sonarr",
                    "isDefault": True,
                    "is4k": False,
                    "activeProfileId": 2,
                    "activeDirectory": "/tv",
                },
            ],
        },
    )
    set_settings(store)
    yield store
    set_settings(None)


@pytest_asyncio.fixture
async def admin_user(session: AsyncSession) -> User:
    """The owner account (id 1)."""
    return await UserRepository(session).create(
        User(id=1, email="admin@example.com", username="admin", permissions=int(Permission.ADMIN))
    )


@pytest.fixture
def make_user(session: AsyncSession):
    """Factory creating local users with the given permission bitmask."""
    counter = {"n": 0}

    async def _make(permissions: int = int(Permission.REQUEST), **fields) -> User:
        counter["n"] += 1
        fields.setdefault("email", f"user{counter['n']}@example.com")
        user = User(permissions=int(permissions), user_type=int(UserType.LOCAL), **fields)
        return await UserRepository(session).create(user)

    return _make


@pytest.fixture
def fake_provider() -> FakeMetadataProvider:
    return FakeMetadataProvider()


@pytest.fixture
def provider_factory(fake_provider: FakeMetadataProvider):
    def factory(*args, **kwargs) -> MetadataProvider:
        return fake_provider

    return factory
