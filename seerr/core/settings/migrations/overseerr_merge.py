"""Mark settings files created before the media server type existed as Plex installs."""

from __future__ import annotations

from typing import Any, Dict

MIGRATION_ID = "0000_overseerr_merge"

PLEX = 1


def migrate(settings: Dict[str, Any]) -> Dict[str, Any]:
    main = settings.setdefault("main", {})
    if main.get("mediaServerType"):
        return settings

    main["mediaServerType"] = PLEX
    main["applicationTitle"] = "Seerr"
    email = settings.get("notifications", {}).get("agents", {}).get("email")
    if isinstance(email, dict):
        email.setdefault("options", {})["senderName"] = "Seerr"
    return settings
