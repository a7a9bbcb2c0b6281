"""Domain-level enums shared by entities, services and routers."""

from .enums import (
    ANIME_KEYWORD_ID,
    MEDIA_IDENTIFIER_TYPES,
    MediaRequestStatus,
    MediaStatus,
    MediaType,
    MetadataProviderType,
    ServiceType,
)

__all__ = [
    "ANIME_KEYWORD_ID",
    "MEDIA_IDENTIFIER_TYPES",
    "MediaRequestStatus",
    "MediaStatus",
    "MediaType",
    "MetadataProviderType",
    "ServiceType",
]
