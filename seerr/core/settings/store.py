"""
Application settings store.

``SettingsStore`` owns the ``settings.json`` document that administrators edit
through the settings API. It loads and migrates the file, fills in generated
secrets, and writes changes back atomically. The process-wide instance is
obtained with ``get_settings()``.
"""

from __future__ import annotations

import base64
import json
import os
import time
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from seerr.core.logging_config import get_logger

from .migrations import migrate_to_routing_rules
from .migrator import run_migrations, write_settings_file
from .models import (
    ActivitySettings,
    AllSettings,
    FullPublicSettings,
    MainSettings,
    MetadataSettings,
    NetworkSettings,
    PublicSettings,
    RadarrSettings,
    SonarrSettings,
)

logger = get_logger(__name__)

SETTINGS_FILE_NAME = "settings.json"


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``.

    Nested dicts are merged key by key; any other value in ``override``
    (lists included) replaces the value in ``base``.
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def generate_api_key() -> str:
    """New API key, or the ``API_KEY`` environment variable when it is set."""
    env_key = os.getenv("API_KEY")
    if env_key:
        return env_key
    raw = f"{int(time.time() * 1000)}{uuid.uuid4()}"
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


class SettingsStore:
    """Load, migrate and persist the application settings document."""

    def __init__(self, path: Union[str, Path], initial: Optional[Dict[str, Any]] = None) -> None:
        self.path = Path(path)
        self.data = AllSettings()
        if initial:
            self.data = AllSettings.model_validate(deep_merge(self.to_document(), initial))

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    @property
    def main(self) -> MainSettings:
        return self.data.main

    @main.setter
    def main(self, value: MainSettings) -> None:
        self.data.main = value

    @property
    def metadata_settings(self) -> MetadataSettings:
        return self.data.metadata_settings

    @metadata_settings.setter
    def metadata_settings(self, value: MetadataSettings) -> None:
        self.data.metadata_settings = value

    @property
    def radarr(self) -> List[RadarrSettings]:
        return self.data.radarr

    @radarr.setter
    def radarr(self, value: List[RadarrSettings]) -> None:
        self.data.radarr = value

    @property
    def sonarr(self) -> List[SonarrSettings]:
        return self.data.sonarr

    @sonarr.setter
    def sonarr(self, value: List[SonarrSettings]) -> None:
        self.data.sonarr = value

    @property
    def network(self) -> NetworkSettings:
        return self.data.network

    @property
    def public(self) -> PublicSettings:
        return self.data.public

    @property
    def activity(self) -> ActivitySettings:
        return self.data.activity

    @property
    def migrations(self) -> List[str]:
        return self.data.migrations

    @property
    def client_id(self) -> str:
        return self.data.client_id

    @property
    def full_public_settings(self) -> FullPublicSettings:
        main = self.main
        return FullPublicSettings(
            application_title=main.application_title,
            application_url=main.application_url,
            hide_available=main.hide_available,
            hide_blocklisted=main.hide_blocklisted,
            local_login=main.local_login,
            media_server_login=main.media_server_login,
            movie_4k_enabled=any(radarr.is_4k for radarr in self.radarr),
            series_4k_enabled=any(sonarr.is_4k for sonarr in self.sonarr),
            discover_region=main.discover_region,
            streaming_region=main.streaming_region,
            original_language=main.original_language,
            media_server_type=main.media_server_type,
            partial_requests_enabled=main.partial_requests_enabled,
            enable_special_episodes=main.enable_special_episodes,
            locale=main.locale,
            youtube_url=main.youtube_url,
            metadata_settings=self.metadata_settings,
            initialized=self.public.initialized,
        )

    def default_service(self, service_type: str, is_4k: bool) -> Optional[Union[RadarrSettings, SonarrSettings]]:
        """The default Radarr/Sonarr instance for the given quality, if one is configured."""
        services = self.radarr if service_type == "radarr" else self.sonarr
        return next((s for s in services if s.is_default and s.is_4k == is_4k), None)

    def find_service(self, service_type: str, service_id: int) -> Optional[Union[RadarrSettings, SonarrSettings]]:
        services = self.radarr if service_type == "radarr" else self.sonarr
        return next((s for s in services if s.id == service_id), None)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_document(self) -> Dict[str, Any]:
        """The settings as stored on disk (camelCase keys)."""
        return self.data.model_dump(mode="json", by_alias=True)

    def load(self, override: Optional[Dict[str, Any]] = None, raw: bool = False) -> "SettingsStore":
        """Load settings from disk.

        Args:
            override: Replace the whole document with this one instead of reading the file
            raw: Skip migrations and generated values

        Returns:
            This store
        """
        if override is not None:
            self.data = AllSettings.model_validate(override)
            return self

        content: Optional[str] = None
        if self.path.exists():
            content = self.path.read_text(encoding="utf-8")
        else:
            logger.info(f"No settings file at {self.path}, writing defaults")
            self.save()

        if content and not raw:
            migrated = run_migrations(json.loads(content), self.path)
            self.data = AllSettings.model_validate(deep_merge(self.to_document(), migrated))
        elif content:
            self.data = AllSettings.model_validate(json.loads(content))

        if raw:
            return self

        changed = False
        env_key = os.getenv("API_KEY")
        if not self.main.api_key:
            self.main.api_key = generate_api_key()
            changed = True
        elif env_key and self.main.api_key != env_key:
            self.main.api_key = env_key
        if not self.data.client_id:
            self.data.client_id = str(uuid.uuid4())
            changed = True
        if changed:
            self.save()
        return self

    def save(self) -> None:
        """Write the document atomically (temporary file, then rename)."""
        write_settings_file(self.path, self.to_document())

    def regenerate_api_key(self) -> MainSettings:
        self.main.api_key = generate_api_key()
        self.save()
        return self.main

    async def run_database_migrations(self, session: AsyncSession) -> None:
        """Run the settings migrations that write to the database, then persist."""
        document = self.to_document()
        before = list(document.get("migrations") or [])
        migrated = await migrate_to_routing_rules.migrate(document, session)
        if migrated.get("migrations") != before:
            self.data = AllSettings.model_validate(migrated)
            self.save()


_settings: Optional[SettingsStore] = None


def get_settings() -> SettingsStore:
    """Process-wide settings store, created and loaded on first use."""
    global _settings
    if _settings is None:
        from seerr.server.core.config import settings as server_settings

        _settings = SettingsStore(Path(server_settings.config_directory) / SETTINGS_FILE_NAME)
        _settings.load()
    return _settings


def set_settings(store: Optional[SettingsStore]) -> None:
    """Replace the process-wide store (``None`` forces a reload on next use)."""
    global _settings
    _settings = store
