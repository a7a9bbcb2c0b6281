"""
Settings file migrations.

Each migration is an idempotent function that patches the raw settings
document (camelCase keys, as stored on disk). ``FILE_MIGRATIONS`` run in order
whenever the file is loaded; ``migrate_to_routing_rules`` also needs a
database session and runs at application startup.
"""

from typing import Any, Callable, Dict, List, Tuple

from . import (
    migrate_blacklist_to_blocklist,
    migrate_dashboard_settings,
    migrate_network_settings,
    migrate_to_routing_rules,
    overseerr_merge,
    remove_lunasea,
)

SettingsMigration = Callable[[Dict[str, Any]], Dict[str, Any]]

FILE_MIGRATIONS: List[Tuple[str, SettingsMigration]] = [
    (overseerr_merge.MIGRATION_ID, overseerr_merge.migrate),
    (migrate_network_settings.MIGRATION_ID, migrate_network_settings.migrate),
    (remove_lunasea.MIGRATION_ID, remove_lunasea.migrate),
    (migrate_blacklist_to_blocklist.MIGRATION_ID, migrate_blacklist_to_blocklist.migrate),
    (migrate_dashboard_settings.MIGRATION_ID, migrate_dashboard_settings.migrate),
]

__all__ = ["FILE_MIGRATIONS", "SettingsMigration", "migrate_to_routing_rules"]
