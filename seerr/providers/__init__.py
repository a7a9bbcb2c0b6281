"""Metadata providers (TMDb, TheTVDB) behind a common interface."""

from .base import MetadataProvider
from .errors import ExternalApiError, MediaNotFoundError
from .externalapi import ExternalAPI, clear_cache
from .factory import get_metadata_provider
from .models import MediaDetails
from .tmdb import TheMovieDb
from .tvdb import Tvdb

__all__ = [
    "ExternalAPI",
    "ExternalApiError",
    "MediaDetails",
    "MediaNotFoundError",
    "MetadataProvider",
    "TheMovieDb",
    "Tvdb",
    "clear_cache",
    "get_metadata_provider",
]
