"""Test configuration for database unit tests.

The ``session`` fixture from the unit test conftest gives every test a fresh
in-memory SQLite database; the fixtures here provide sample rows.
"""

from __future__ import annotations

import pytest


@pytest.fixture(scope="function")
def sample_user_data() -> dict:
    """Sample user data for testing."""
    return {
        "email": "friend@example.com",
        "username": "friend",
        "plex_username": "friend_plex",
        "permissions": 32,
        "max_movie_rating": "PG-13",
    }


@pytest.fixture(scope="function")
def sample_media_data() -> dict:
    """Sample media data for testing."""
    return {
        "media_type": "tv",
        "tmdb_id": 1399,
        "tvdb_id": 121361,
        "imdb_id": "tt0944947",
    }


@pytest.fixture(scope="function")
def sample_routing_rule_data() -> dict:
    """Sample routing rule data for testing."""
    return {
        "name": "Anime",
        "service_type": "sonarr",
        "is_4k": False,
        "priority": 10,
        "keywords": "210024",
        "target_service_id": 0,
        "series_type": "anime",
        "root_folder": "/anime",
    }


@pytest.fixture(scope="function")
def sample_override_rule_data() -> dict:
    """Sample override rule data for testing."""
    return {
        "radarr_service_id": 0,
        "genre": "16",
        "language": "ja",
        "root_folder": "/animation",
        "tags": "1,2",
    }
