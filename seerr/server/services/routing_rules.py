"""
Routing rule administration.

Validation and priority bookkeeping for creating, updating and reordering
routing rules. Fallback rules sit outside the priority order; every other
rule needs at least one condition.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from seerr.core.database.entities import RoutingRule
from seerr.core.database.repositories import RoutingRuleRepository
from seerr.core.logging_config import get_logger
from seerr.core.models.io import RoutingRuleCreate, RoutingRuleUpdate
from seerr.core.settings import SettingsStore

logger = get_logger(__name__)

SERVICE_TYPES = ("radarr", "sonarr")
MAX_REORDER_IDS = 1000
PRIORITY_STEP = 10


class RoutingRuleError(Exception):
    """Invalid routing rule change; carries the HTTP status to answer with."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RoutingRuleNotFoundError(Exception):
    pass


def _resolve_target(store: SettingsStore, service_type: str, target_service_id: int):
    target = store.find_service(service_type, target_service_id)
    if target is None:
        raise RoutingRuleError("Target instance not found.")
    return target


async def _check_single_fallback(
    repo: RoutingRuleRepository, service_type: str, is_4k: bool, exclude_id: Optional[int] = None
) -> None:
    existing = await repo.get_fallback(service_type, is_4k)
    if existing is not None and existing.id != exclude_id:
        raise RoutingRuleError("Fallback already exists for this serviceType/is4k.", status_code=409)


def _check_fallback_target(
    service_type: str, root_folder: Optional[str], profile_id: Optional[int], minimum_availability: Optional[str]
) -> None:
    if not root_folder:
        raise RoutingRuleError("Fallback requires rootFolder.")
    if profile_id is None:
        raise RoutingRuleError("Fallback requires activeProfileId.")
    if service_type == "radarr" and not minimum_availability:
        raise RoutingRuleError("Fallback requires minimumAvailability for radarr.")


async def create_routing_rule(session: AsyncSession, store: SettingsStore, body: RoutingRuleCreate) -> RoutingRule:
    """Validate and store a new routing rule.

    ``is_4k`` is taken from the target instance. New non-fallback rules are
    placed above every existing rule of their group.

    Raises:
        RoutingRuleError: Validation failed (400) or a fallback already exists (409)
    """
    if body.service_type not in SERVICE_TYPES:
        raise RoutingRuleError("Invalid serviceType.")
    if body.target_service_id < 0:
        raise RoutingRuleError("Invalid targetServiceId.")

    target = _resolve_target(store, body.service_type, body.target_service_id)
    is_4k = bool(target.is_4k)
    repo = RoutingRuleRepository(session)

    if body.is_fallback:
        await _check_single_fallback(repo, body.service_type, is_4k)
        if not target.is_default:
            raise RoutingRuleError("Fallback rules must target a default instance.")
        _check_fallback_target(body.service_type, body.root_folder, body.active_profile_id, body.minimum_availability)
    elif not any((body.users, body.genres, body.languages, body.keywords)):
        raise RoutingRuleError("Non-fallback rules must have at least one condition.")

    priority = 0 if body.is_fallback else await repo.max_priority(body.service_type, is_4k) + PRIORITY_STEP
    conditions = {} if body.is_fallback else body.model_dump(include={"users", "genres", "languages", "keywords"})
    rule = RoutingRule(
        name=body.name,
        service_type=body.service_type,
        target_service_id=body.target_service_id,
        is_4k=is_4k,
        is_fallback=body.is_fallback,
        priority=priority,
        active_profile_id=body.active_profile_id,
        root_folder=body.root_folder,
        series_type=body.series_type,
        tags=body.tags,
        minimum_availability=body.minimum_availability,
        **conditions,
    )
    rule = await repo.create(rule)
    logger.info(f"Routing rule {rule.id} '{rule.name}' created for {rule.service_type} is_4k={is_4k}")
    return rule


async def update_routing_rule(
    session: AsyncSession, store: SettingsStore, rule_id: int, body: RoutingRuleUpdate
) -> RoutingRule:
    """Apply a partial update to a routing rule, re-validating the merged result.

    Raises:
        RoutingRuleNotFoundError: Unknown rule id
        RoutingRuleError: Validation failed (400) or a fallback already exists (409)
    """
    repo = RoutingRuleRepository(session)
    rule = await repo.get_by_id(rule_id)
    if rule is None:
        raise RoutingRuleNotFoundError(f"Routing rule {rule_id} not found.")

    changes = body.model_dump(exclude_unset=True)
    service_type = changes.get("service_type") or rule.service_type
    if service_type not in SERVICE_TYPES:
        raise RoutingRuleError("Invalid serviceType.")
    target_service_id = changes.get("target_service_id", rule.target_service_id)
    target = _resolve_target(store, service_type, target_service_id)
    is_4k = bool(target.is_4k)
    is_fallback = bool(changes.get("is_fallback", rule.is_fallback))

    if is_fallback:
        await _check_single_fallback(repo, service_type, is_4k, exclude_id=rule.id)

    merged = {key: changes.get(key, getattr(rule, key)) for key in ("users", "genres", "languages", "keywords")}
    if not is_fallback and not any(merged.values()):
        raise RoutingRuleError("Non-fallback rules must have at least one condition.")
    if is_fallback and not target.is_default:
        raise RoutingRuleError("Fallback rules must target a default instance.")

    profile_id = changes.get("active_profile_id", rule.active_profile_id)
    root_folder = changes.get("root_folder", rule.root_folder)
    minimum_availability = (
        changes.get("minimum_availability", rule.minimum_availability) if service_type == "radarr" else None
    )
    if is_fallback:
        _check_fallback_target(service_type, root_folder, profile_id, minimum_availability)

    if is_fallback:
        rule.priority = 0
    elif changes.get("priority") is not None:
        rule.priority = changes["priority"]
    elif rule.service_type != service_type or rule.is_4k != is_4k or rule.is_fallback:
        rule.priority = await repo.max_priority(service_type, is_4k) + PRIORITY_STEP

    rule.name = changes.get("name") or rule.name
    rule.service_type = service_type
    rule.target_service_id = target_service_id
    rule.is_4k = is_4k
    rule.is_fallback = is_fallback
    for key, value in merged.items():
        setattr(rule, key, None if is_fallback else value)
    rule.active_profile_id = profile_id
    rule.root_folder = root_folder
    rule.minimum_availability = minimum_availability
    rule.series_type = changes.get("series_type", rule.series_type)
    rule.tags = changes.get("tags", rule.tags)

    rule = await repo.update(rule)
    logger.info(f"Routing rule {rule.id} updated")
    return rule


async def reorder_routing_rules(session: AsyncSession, rule_ids: Sequence[int]) -> List[RoutingRule]:
    """Assign priorities from the given order: the first id gets the highest.

    Fallback rules in the list are skipped and keep priority 0.

    Raises:
        RoutingRuleError: More than MAX_REORDER_IDS ids
    """
    if len(rule_ids) > MAX_REORDER_IDS:
        raise RoutingRuleError(f"Too many ruleIds provided. Maximum allowed is {MAX_REORDER_IDS}.")

    result = await session.execute(select(RoutingRule).where(RoutingRule.id.in_(list(rule_ids))))
    rules = {rule.id: rule for rule in result.scalars().all()}
    ordered = [rule_id for rule_id in rule_ids if not (rule_id in rules and rules[rule_id].is_fallback)]

    for index, rule_id in enumerate(ordered):
        rule = rules.get(rule_id)
        if rule is not None:
            rule.priority = (len(ordered) - index) * PRIORITY_STEP
            session.add(rule)
    await session.commit()
    return await RoutingRuleRepository(session).list()
