"""
Configuration Settings.

This module defines the process configuration using Pydantic's BaseSettings.
It loads all configuration from environment variables and the .env file.

Runtime-editable application options (titles, Radarr/Sonarr instances, quotas,
the API key) live in ``settings.json`` under ``CONFIG_DIRECTORY`` and are handled
by ``seerr.core.settings``.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class LoggingConfig(BaseModel):
    """Logging output configuration."""

    log_format: str = Field(default="detailed", alias="LOG_FORMAT", description="Log format (simple, detailed, json)")
    log_file_dir: str = Field(default="config/logs", alias="LOG_FILE_DIR", description="Directory for log files")
    enable_file_logging: bool = Field(
        default=False, alias="ENABLE_FILE_LOGGING", description="Write logs to LOG_FILE_DIR/seerr.log"
    )

    model_config = {"populate_by_name": True}


class MetadataProviderConfig(BaseModel):
    """Credentials and endpoints for metadata providers."""

    tmdb_api_key: Optional[str] = Field(default=None, alias="TMDB_API_KEY", description="TheMovieDb v3 API key")
    tmdb_base_url: str = Field(
        default="https://api.themoviedb.org/3", alias="TMDB_BASE_URL", description="TheMovieDb API base URL"
    )
    tvdb_api_key: Optional[str] = Field(default=None, alias="TVDB_API_KEY", description="TheTVDB v4 API key")
    tvdb_base_url: str = Field(
        default="https://api4.thetvdb.com/v4", alias="TVDB_BASE_URL", description="TheTVDB API base URL"
    )
    cache_ttl: int = Field(
        default=300, alias="METADATA_CACHE_TTL", description="Seconds to cache metadata GET responses"
    )

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Process settings model.

    All properties are bound from environment variables and the .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # =====================================================================
    # Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Server host address to bind to",
        alias="SEERR_SERVER_HOST",
    )
    server_port: int = Field(
        default=5055,
        description="Server port number",
        alias="PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="SEERR_LOG_LEVEL",
    )

    # =====================================================================
    # Storage Configuration
    # =====================================================================
    config_directory: str = Field(
        default="config",
        description="Directory holding settings.json, the SQLite database and logs",
        alias="CONFIG_DIRECTORY",
    )
    database_url: str = Field(
        default="sqlite+aiosqlite:///config/db/db.sqlite3",
        description="Database connection URL (SQLite or Postgres)",
        alias="DATABASE_URL",
    )

    # =====================================================================
    # Outbound HTTP
    # =====================================================================
    api_request_timeout: float = Field(
        default=10.0,
        description="Timeout in seconds for metadata provider requests",
        alias="API_REQUEST_TIMEOUT",
    )

    # =====================================================================
    # Logging
    # =====================================================================
    log_format: str = Field(default="detailed", alias="LOG_FORMAT")
    log_file_dir: str = Field(default="config/logs", alias="LOG_FILE_DIR")
    enable_file_logging: bool = Field(default=False, alias="ENABLE_FILE_LOGGING")

    # =====================================================================
    # Metadata Providers
    # =====================================================================
    tmdb_api_key: Optional[str] = Field(default=None, alias="TMDB_API_KEY")
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3", alias="TMDB_BASE_URL")
    tvdb_api_key: Optional[str] = Field(default=None, alias="TVDB_API_KEY")
    tvdb_base_url: str = Field(default="https://api4.thetvdb.com/v4", alias="TVDB_BASE_URL")
    metadata_cache_ttl: int = Field(default=300, alias="METADATA_CACHE_TTL")

    # =====================================================================
    # CORS
    # =====================================================================
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(default=["*"], alias="CORS_ALLOW_METHODS")
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration from environment variables."""
        return LoggingConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def metadata(self) -> MetadataProviderConfig:
        """Get metadata provider configuration from environment variables."""
        return MetadataProviderConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
