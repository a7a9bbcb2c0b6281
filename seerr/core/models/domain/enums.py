"""Domain enums for media, requests and service routing."""

from __future__ import annotations

from enum import Enum, IntEnum


class MediaType(str, Enum):
    """Kind of media a request or blocklist entry refers to."""

    movie = "movie"
    tv = "tv"
    book = "book"


class MediaStatus(IntEnum):
    """
    Availability of a media item in the library.

    Stored as an integer column, values are stable and shared with clients.
    """

    UNKNOWN = 1
    PENDING = 2
    PROCESSING = 3
    PARTIALLY_AVAILABLE = 4
    AVAILABLE = 5
    BLOCKLISTED = 6
    DELETED = 7


class MediaRequestStatus(IntEnum):
    """Lifecycle status of a media request."""

    PENDING = 1
    APPROVED = 2
    DECLINED = 3
    FAILED = 4
    COMPLETED = 5


class MetadataProviderType(str, Enum):
    """External catalogs that can supply TV metadata."""

    tmdb = "tmdb"
    tvdb = "tvdb"


class ServiceType(str, Enum):
    """Download managers that receive approved requests."""

    radarr = "radarr"  # movies
    sonarr = "sonarr"  # series


# External id namespace used to identify each media type.
MEDIA_IDENTIFIER_TYPES = {
    MediaType.movie: "tmdb",
    MediaType.tv: "tmdb",
    MediaType.book: "hardcover",
}

# TMDb keyword attached to anime series.
ANIME_KEYWORD_ID = 210024
