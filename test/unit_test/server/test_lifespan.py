"""
Unit tests for FastAPI application lifespan management.

Tests verify that startup initializes the database and runs the settings
migrations, and that failures in either step are logged without aborting
startup.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI

from seerr.server.main import lifespan

pytestmark = pytest.mark.asyncio


def _session_maker(session):
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=session)
    ctx.__aexit__ = AsyncMock(return_value=None)
    return MagicMock(return_value=ctx)


class TestLifespanStartup:
    """Test application startup lifespan events."""

    async def test_startup_initializes_database_and_runs_migrations(self):
        session = MagicMock()
        store = MagicMock()
        store.run_database_migrations = AsyncMock()

        with (
            patch("seerr.server.main.init_db", new_callable=AsyncMock) as mock_init_db,
            patch("seerr.server.main.get_settings", return_value=store),
            patch("seerr.server.main.async_session_maker", _session_maker(session)),
        ):
            async with lifespan(FastAPI()):
                mock_init_db.assert_awaited_once()
                store.run_database_migrations.assert_awaited_once_with(session)

    async def test_database_failure_is_logged(self):
        store = MagicMock()
        store.run_database_migrations = AsyncMock()

        with (
            patch("seerr.server.main.init_db", new_callable=AsyncMock, side_effect=RuntimeError("db down")),
            patch("seerr.server.main.get_settings", return_value=store),
            patch("seerr.server.main.async_session_maker", _session_maker(MagicMock())),
            patch("seerr.server.main.logger") as mock_logger,
        ):
            async with lifespan(FastAPI()):
                pass

        assert "Database initialization failed" in mock_logger.error.call_args_list[0][0][0]
        store.run_database_migrations.assert_awaited_once()

    async def test_migration_failure_is_logged(self):
        store = MagicMock()
        store.run_database_migrations = AsyncMock(side_effect=RuntimeError("bad rule"))

        with (
            patch("seerr.server.main.init_db", new_callable=AsyncMock),
            patch("seerr.server.main.get_settings", return_value=store),
            patch("seerr.server.main.async_session_maker", _session_maker(MagicMock())),
            patch("seerr.server.main.logger") as mock_logger,
        ):
            async with lifespan(FastAPI()):
                pass

        mock_logger.error.assert_called_once()
        assert "Settings database migrations failed" in mock_logger.error.call_args[0][0]


class TestLifespanShutdown:
    async def test_shutdown_is_logged(self):
        store = MagicMock()
        store.run_database_migrations = AsyncMock()

        with (
            patch("seerr.server.main.init_db", new_callable=AsyncMock),
            patch("seerr.server.main.get_settings", return_value=store),
            patch("seerr.server.main.async_session_maker", _session_maker(MagicMock())),
            patch("seerr.server.main.logger") as mock_logger,
        ):
            async with lifespan(FastAPI()):
                pass

        messages = [call[0][0] for call in mock_logger.info.call_args_list]
        assert any("Shutting down" in message for message in messages)
