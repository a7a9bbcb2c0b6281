from typing import AsyncGenerator
from unittest.mock import patch

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    session: AsyncSession, store, admin_user, provider_factory
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies.

    Requests carry the API key and act as the owner account unless an
    ``X-Api-User`` header is sent.
    """
    from seerr.core.database import get_session
    from seerr.server.main import app
    from seerr.server.services.auth import get_settings_store
    from seerr.server.services.deps import get_provider_factory

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_settings_store] = lambda: store
    app.dependency_overrides[get_provider_factory] = lambda: provider_factory

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("seerr.server.main.lifespan", mock_lifespan):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://localhost",
            headers={"X-Api-Key": store.main.api_key},
        ) as client:
            yield client

    app.dependency_overrides.clear()
