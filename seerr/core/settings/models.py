"""
Application settings models.

These models describe the ``settings.json`` file that administrators edit at
runtime. Field names are snake_case in Python and camelCase on disk and over
the API, so existing settings files keep loading unchanged. Unknown keys are
preserved (``extra="allow"``) so sections this server does not manage survive
a load/save cycle.
"""

from __future__ import annotations

from enum import IntEnum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from seerr.core.models.domain import MetadataProviderType
from seerr.core.permissions import Permission


class MediaServerType(IntEnum):
    """Media server backend configured during setup."""

    PLEX = 1
    JELLYFIN = 2
    EMBY = 3
    NOT_CONFIGURED = 4


class SettingsModel(BaseModel):
    """Base for all settings sections."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class Quota(SettingsModel):
    quota_limit: Optional[int] = None
    quota_days: Optional[int] = None


class DefaultQuotas(SettingsModel):
    movie: Quota = Field(default_factory=Quota)
    tv: Quota = Field(default_factory=Quota)
    combined: Optional[Quota] = None


class MainSettings(SettingsModel):
    """General application settings."""

    api_key: str = ""
    application_title: str = "Seerr"
    application_url: str = ""
    cache_images: bool = False
    default_permissions: int = int(Permission.REQUEST)
    default_quotas: DefaultQuotas = Field(default_factory=DefaultQuotas)
    hide_available: bool = False
    hide_blocklisted: bool = False
    local_login: bool = True
    media_server_login: bool = True
    new_plex_login: bool = True
    discover_region: str = ""
    streaming_region: str = ""
    original_language: str = ""
    blocklisted_tags: str = ""
    blocklisted_tags_limit: int = 50
    media_server_type: int = int(MediaServerType.NOT_CONFIGURED)
    partial_requests_enabled: bool = True
    enable_special_episodes: bool = False
    locale: str = "en"
    youtube_url: str = ""
    ignored_path_patterns: List[str] = Field(
        default_factory=list, description="Regular expressions for library file paths to ignore"
    )


class DVRSettings(SettingsModel):
    """Fields shared by Radarr and Sonarr instances."""

    id: int
    name: str
    hostname: str = ""
    port: int = 0
    api_key: str = ""
    use_ssl: bool = False
    base_url: Optional[str] = None
    active_profile_id: int = 0
    active_profile_name: str = ""
    active_directory: str = ""
    tags: List[int] = Field(default_factory=list)
    is_4k: bool = Field(default=False, alias="is4k")
    is_default: bool = False
    external_url: Optional[str] = None
    sync_enabled: bool = False
    prevent_search: bool = False
    tag_requests: bool = False
    override_rule: List[int] = Field(default_factory=list)


class RadarrSettings(DVRSettings):
    minimum_availability: str = "released"


class SonarrSettings(DVRSettings):
    series_type: str = "standard"
    anime_series_type: str = "anime"
    active_anime_profile_id: Optional[int] = None
    active_anime_profile_name: Optional[str] = None
    active_anime_directory: Optional[str] = None
    active_anime_language_profile_id: Optional[int] = None
    active_language_profile_id: Optional[int] = None
    anime_tags: List[int] = Field(default_factory=list)
    enable_season_folders: bool = False


class MetadataSettings(SettingsModel):
    """Which catalog supplies TV and anime metadata."""

    tv: MetadataProviderType = MetadataProviderType.tmdb
    anime: MetadataProviderType = MetadataProviderType.tmdb


class ProxySettings(SettingsModel):
    enabled: bool = False
    hostname: str = ""
    port: int = 8080
    use_ssl: bool = False
    user: str = ""
    password: str = ""
    bypass_filter: str = ""
    bypass_local_addresses: bool = True


class DnsCacheSettings(SettingsModel):
    enabled: bool = False
    force_min_ttl: Optional[int] = 0
    force_max_ttl: Optional[int] = -1


class NetworkSettings(SettingsModel):
    """Outbound networking options."""

    csrf_protection: bool = False
    force_ipv4_first: bool = False
    trust_proxy: bool = False
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    dns_cache: DnsCacheSettings = Field(default_factory=DnsCacheSettings)
    api_request_timeout: int = Field(default=10000, description="Outbound API timeout in milliseconds")


class Announcement(SettingsModel):
    id: str
    title: str = ""
    body: str = ""


class ActivitySettings(SettingsModel):
    """Dashboard hero and announcement content."""

    hero_tagline: Optional[str] = None
    hero_title: Optional[str] = None
    hero_body: Optional[str] = None
    feedback_webhook_url: Optional[str] = None
    announcement_enabled: bool = False
    announcements: List[Announcement] = Field(default_factory=list)


class PublicSettings(SettingsModel):
    initialized: bool = False


class AllSettings(SettingsModel):
    """The complete settings document."""

    client_id: str = ""
    main: MainSettings = Field(default_factory=MainSettings)
    metadata_settings: MetadataSettings = Field(default_factory=MetadataSettings)
    radarr: List[RadarrSettings] = Field(default_factory=list)
    sonarr: List[SonarrSettings] = Field(default_factory=list)
    public: PublicSettings = Field(default_factory=PublicSettings)
    network: NetworkSettings = Field(default_factory=NetworkSettings)
    activity: ActivitySettings = Field(default_factory=ActivitySettings)
    migrations: List[str] = Field(default_factory=list)


class FullPublicSettings(SettingsModel):
    """Settings exposed to unauthenticated clients."""

    application_title: str
    application_url: str
    hide_available: bool
    hide_blocklisted: bool
    local_login: bool
    media_server_login: bool
    movie_4k_enabled: bool = Field(alias="movie4kEnabled")
    series_4k_enabled: bool = Field(alias="series4kEnabled")
    discover_region: str
    streaming_region: str
    original_language: str
    media_server_type: int
    partial_requests_enabled: bool
    enable_special_episodes: bool
    locale: str
    youtube_url: str
    metadata_settings: MetadataSettings
    initialized: bool
