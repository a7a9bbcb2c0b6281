"""Drop the retired LunaSea notification agent."""

from __future__ import annotations

from typing import Any, Dict

MIGRATION_ID = "0006_remove_lunasea"


def migrate(settings: Dict[str, Any]) -> Dict[str, Any]:
    agents = settings.get("notifications", {}).get("agents")
    if isinstance(agents, dict):
        agents.pop("lunasea", None)
    return settings
