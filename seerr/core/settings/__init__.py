"""
Application settings file (``settings.json``).

- models.py: Pydantic models for every settings section
- store.py: ``SettingsStore`` load/save and the ``get_settings()`` singleton
- migrator.py / migrations/: upgrade chain for older settings files
"""

from .models import AllSettings, FullPublicSettings, MainSettings, MediaServerType, MetadataSettings
from .store import SettingsStore, deep_merge, generate_api_key, get_settings, set_settings

__all__ = [
    "AllSettings",
    "FullPublicSettings",
    "MainSettings",
    "MediaServerType",
    "MetadataSettings",
    "SettingsStore",
    "deep_merge",
    "generate_api_key",
    "get_settings",
    "set_settings",
]
