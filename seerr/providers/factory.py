"""
Metadata provider selection.

Movies always use TMDb. Series and anime use TheTVDB when the settings file
selects it for that category; any failure while building the TVDB client
falls back to TMDb.
"""

from __future__ import annotations

from typing import Literal, Optional

import httpx

from seerr.core.logging_config import get_logger
from seerr.core.models.domain import MetadataProviderType
from seerr.core.settings import SettingsStore, get_settings
from seerr.server.core.config import settings as server_settings

from .base import MetadataProvider
from .tmdb import TheMovieDb
from .tvdb import Tvdb

logger = get_logger(__name__)

ProviderMediaType = Literal["movie", "tv", "anime"]


def build_tmdb(client: Optional[httpx.AsyncClient] = None) -> TheMovieDb:
    config = server_settings.metadata
    return TheMovieDb(
        config.tmdb_api_key,
        base_url=config.tmdb_base_url,
        timeout=server_settings.api_request_timeout,
        cache_ttl=config.cache_ttl,
        client=client,
    )


def build_tvdb(client: Optional[httpx.AsyncClient] = None) -> Tvdb:
    config = server_settings.metadata
    if not config.tvdb_api_key:
        raise ValueError("TVDB_API_KEY is not configured")
    return Tvdb(
        config.tvdb_api_key,
        build_tmdb(client),
        base_url=config.tvdb_base_url,
        timeout=server_settings.api_request_timeout,
        client=client,
    )


def get_metadata_provider(
    media_type: ProviderMediaType,
    store: Optional[SettingsStore] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> MetadataProvider:
    """Pick the provider for a media category.

    Args:
        media_type: "movie", "tv" or "anime"
        store: Settings store (defaults to the process-wide one)
        client: Shared HTTP client (tests inject a mock transport here)

    Returns:
        A TMDb or TVDB provider
    """
    try:
        if media_type == "movie":
            return build_tmdb(client)

        metadata = (store or get_settings()).metadata_settings
        if media_type == "tv" and metadata.tv == MetadataProviderType.tvdb:
            return build_tvdb(client)
        if media_type == "anime" and metadata.anime == MetadataProviderType.tvdb:
            return build_tvdb(client)
        return build_tmdb(client)
    except Exception as e:
        logger.error(f"Failed to get metadata provider: {e}")
        return build_tmdb(client)
