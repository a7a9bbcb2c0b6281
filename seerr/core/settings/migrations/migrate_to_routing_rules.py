"""
Convert default Radarr/Sonarr instances and legacy override rules into routing rules.

Unlike the other settings migrations this one writes to the database, so it is
run after the schema exists (application startup) with an open session.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from seerr.core.database.entities import RoutingRule
from seerr.core.database.repositories import OverrideRuleRepository, RoutingRuleRepository
from seerr.core.logging_config import get_logger
from seerr.core.models.domain import ANIME_KEYWORD_ID

logger = get_logger(__name__)

MIGRATION_ID = "0009_migrate_to_routing_rules"


def _join_tags(tags: Optional[List[int]]) -> Optional[str]:
    return ",".join(str(tag) for tag in tags) if tags else None


def _fallback_rule(service_type: str, instance: Dict[str, Any]) -> RoutingRule:
    rule = RoutingRule(
        name=f"{instance.get('name')} Default Route",
        service_type=service_type,
        target_service_id=instance["id"],
        is_4k=bool(instance.get("is4k")),
        is_fallback=True,
        priority=0,
        active_profile_id=instance.get("activeProfileId") or None,
        root_folder=instance.get("activeDirectory") or None,
        tags=_join_tags(instance.get("tags")),
    )
    if service_type == "radarr":
        rule.minimum_availability = instance.get("minimumAvailability") or "released"
    else:
        rule.series_type = instance.get("seriesType") or "standard"
    return rule


def _anime_rule(instance: Dict[str, Any]) -> Optional[RoutingRule]:
    if not (
        instance.get("activeAnimeProfileId") or instance.get("activeAnimeDirectory") or instance.get("animeTags")
    ):
        return None
    return RoutingRule(
        name="Anime",
        service_type="sonarr",
        target_service_id=instance["id"],
        is_4k=bool(instance.get("is4k")),
        is_fallback=False,
        priority=10,
        keywords=str(ANIME_KEYWORD_ID),
        active_profile_id=instance.get("activeAnimeProfileId") or instance.get("activeProfileId") or None,
        root_folder=instance.get("activeAnimeDirectory") or instance.get("activeDirectory") or None,
        series_type=instance.get("animeSeriesType") or "anime",
        tags=_join_tags(instance.get("animeTags")),
    )


async def migrate(settings: Dict[str, Any], session: AsyncSession) -> Dict[str, Any]:
    """Create routing rules from the settings document and existing override rules.

    The migration id is recorded only when every rule was written, so a
    partially failed run is retried on the next start.
    """
    migrations = settings.get("migrations")
    if isinstance(migrations, list) and MIGRATION_ID in migrations:
        return settings

    routing_rules = RoutingRuleRepository(session)
    error_occurred = False

    async def _save(rule: RoutingRule, description: str) -> bool:
        try:
            await routing_rules.create(rule)
            return True
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Failed to create {description}: {e}")
            return False

    for radarr in settings.get("radarr") or []:
        if not radarr.get("isDefault"):
            continue
        if not await _save(_fallback_rule("radarr", radarr), f'Radarr fallback routing rule for "{radarr.get("name")}"'):
            error_occurred = True

    for sonarr in settings.get("sonarr") or []:
        if not sonarr.get("isDefault"):
            continue
        if not await _save(_fallback_rule("sonarr", sonarr), f'Sonarr fallback routing rule for "{sonarr.get("name")}"'):
            error_occurred = True
        anime = _anime_rule(sonarr)
        if anime is not None and not await _save(anime, f'Sonarr anime routing rule for "{sonarr.get("name")}"'):
            error_occurred = True

    try:
        override_rules = await OverrideRuleRepository(session).list()
    except SQLAlchemyError:
        logger.warning("Override rules could not be read; skipping their conversion")
        await session.rollback()
        override_rules = []

    priority = 20
    for override in override_rules:
        is_radarr = override.radarr_service_id is not None
        service_type = "radarr" if is_radarr else "sonarr"
        index = override.radarr_service_id if is_radarr else override.sonarr_service_id
        services = settings.get(service_type) or []
        target = services[index] if index is not None and 0 <= index < len(services) else None
        if target is None:
            logger.error(
                f"Skipping override rule #{override.id}: {service_type} instance at index {index} not found in settings."
            )
            error_occurred = True
            continue

        rule = RoutingRule(
            name=f"Migrated Rule #{override.id}",
            service_type=service_type,
            target_service_id=target["id"],
            is_4k=bool(target.get("is4k")),
            is_fallback=False,
            priority=priority,
            users=override.users or None,
            genres=override.genre or None,
            languages=override.language or None,
            keywords=override.keywords or None,
            active_profile_id=override.profile_id or None,
            root_folder=override.root_folder or None,
            tags=override.tags or None,
        )
        if await _save(rule, f"routing rule from override rule #{override.id}"):
            priority += 10
        else:
            error_occurred = True

    if not error_occurred:
        if not isinstance(settings.get("migrations"), list):
            settings["migrations"] = []
        settings["migrations"].append(MIGRATION_ID)
    return settings
