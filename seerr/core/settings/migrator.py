"""
Settings migration runner.

Applies the file migrations in order to the raw settings document. When any
migration changes the document, the previous file is kept as ``<name>.bak``
and the migrated document is written back.
"""

from __future__ import annotations

import copy
import json
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from seerr.core.logging_config import get_logger

from .migrations import FILE_MIGRATIONS, SettingsMigration

logger = get_logger(__name__)


class SettingsMigrationError(Exception):
    """A settings migration raised; the file on disk is left untouched."""

    def __init__(self, migration_id: str, cause: Exception) -> None:
        super().__init__(f"Settings migration {migration_id} failed: {cause}")
        self.migration_id = migration_id


def run_migrations(
    settings: Dict[str, Any],
    settings_path: Optional[Path] = None,
    migrations: Optional[List[Tuple[str, SettingsMigration]]] = None,
) -> Dict[str, Any]:
    """Run every file migration against ``settings``.

    Args:
        settings: Parsed settings document
        settings_path: File the document was read from; rewritten when changed
        migrations: Override of the migration chain (tests)

    Returns:
        The migrated settings document
    """
    original = copy.deepcopy(settings)
    migrated = settings
    for migration_id, migration in migrations if migrations is not None else FILE_MIGRATIONS:
        try:
            migrated = migration(migrated)
        except Exception as e:
            logger.error(f"Settings migration {migration_id} failed", exc_info=True)
            raise SettingsMigrationError(migration_id, e) from e

    if migrated != original:
        logger.info("Settings file migrated")
        if settings_path is not None and settings_path.exists():
            backup = settings_path.with_name(settings_path.name + ".bak")
            shutil.copyfile(settings_path, backup)
            write_settings_file(settings_path, migrated)
            logger.info(f"Previous settings saved to {backup}")
    return migrated


def write_settings_file(path: Path, data: Dict[str, Any]) -> None:
    """Write ``data`` to ``path`` via a temporary file and an atomic rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(json.dumps(data, indent=1), encoding="utf-8")
    tmp.replace(path)
