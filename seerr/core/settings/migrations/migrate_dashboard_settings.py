"""Copy hero and announcement content from ``main`` into the ``activity`` section."""

from __future__ import annotations

from typing import Any, Dict

MIGRATION_ID = "0008_migrate_dashboard_settings"

STRING_KEYS = ("heroTagline", "heroTitle", "heroBody", "feedbackWebhookUrl")


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def migrate(settings: Dict[str, Any]) -> Dict[str, Any]:
    migrations = settings.get("migrations")
    if isinstance(migrations, list) and MIGRATION_ID in migrations:
        return settings

    activity = settings.get("activity")
    if not isinstance(activity, dict):
        activity = settings["activity"] = {}
    main = settings.get("main")
    if not isinstance(main, dict):
        main = settings["main"] = {}

    for key in STRING_KEYS:
        if _is_blank(activity.get(key)) and not _is_blank(main.get(key)):
            activity[key] = main[key]

    if not isinstance(activity.get("announcementEnabled"), bool) and isinstance(
        main.get("announcementEnabled"), bool
    ):
        activity["announcementEnabled"] = main["announcementEnabled"]

    current = activity.get("announcements")
    if not isinstance(current, list) or not current:
        legacy_list = main.get("announcements")
        if isinstance(legacy_list, list) and legacy_list:
            activity["announcements"] = legacy_list
        elif not _is_blank(main.get("announcementBody")):
            title = main.get("announcementTitle")
            activity["announcements"] = [
                {
                    "id": "legacy",
                    "title": title if isinstance(title, str) else "",
                    "body": main["announcementBody"],
                }
            ]

    if not isinstance(migrations, list):
        settings["migrations"] = []
    settings["migrations"].append(MIGRATION_ID)
    return settings
