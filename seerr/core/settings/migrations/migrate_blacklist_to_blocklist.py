"""Rename the legacy "blacklist" settings keys to "blocklist"."""

from __future__ import annotations

from typing import Any, Dict

MIGRATION_ID = "0008_migrate_blacklist_to_blocklist"

RENAMED_MAIN_KEYS = {
    "hideBlacklisted": "hideBlocklisted",
    "blacklistedTags": "blocklistedTags",
    "blacklistedTagsLimit": "blocklistedTagsLimit",
}


def migrate(settings: Dict[str, Any]) -> Dict[str, Any]:
    migrations = settings.get("migrations")
    if isinstance(migrations, list) and MIGRATION_ID in migrations:
        return settings

    main = settings.get("main")
    if isinstance(main, dict):
        for old, new in RENAMED_MAIN_KEYS.items():
            if old in main:
                main[new] = main.pop(old)

    jobs = settings.get("jobs")
    if isinstance(jobs, dict) and jobs.get("process-blacklisted-tags"):
        jobs["process-blocklisted-tags"] = jobs.pop("process-blacklisted-tags")

    if not isinstance(migrations, list):
        settings["migrations"] = []
    settings["migrations"].append(MIGRATION_ID)
    return settings
