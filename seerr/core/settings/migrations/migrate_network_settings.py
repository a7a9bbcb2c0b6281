"""Move network options out of ``main`` into their own ``network`` section."""

from __future__ import annotations

from typing import Any, Dict

MIGRATION_ID = "0005_migrate_network_settings"

DEFAULT_PROXY = {
    "enabled": False,
    "hostname": "",
    "port": 8080,
    "useSsl": False,
    "user": "",
    "password": "",
    "bypassFilter": "",
    "bypassLocalAddresses": True,
}


def migrate(settings: Dict[str, Any]) -> Dict[str, Any]:
    if settings.get("network"):
        return settings

    main = settings.setdefault("main", {})
    settings["network"] = {
        "csrfProtection": main.pop("csrfProtection", False),
        "trustProxy": main.pop("trustProxy", False),
        "forceIpv4First": main.pop("forceIpv4First", False),
        "proxy": main.pop("proxy", None) or dict(DEFAULT_PROXY),
    }
    return settings
