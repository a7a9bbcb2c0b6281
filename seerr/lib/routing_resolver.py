"""
Routing rule resolution.

Rules for a service type and quality are evaluated by descending priority and
the first match wins. Populated condition types are ANDed together; the values
inside one condition are ORed. When nothing matches, the default instance
from the settings file is used.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from seerr.core.database.entities import RoutingRule
from seerr.core.database.repositories import RoutingRuleRepository
from seerr.core.logging_config import get_logger
from seerr.core.settings import SettingsStore

logger = get_logger(__name__)


class NoDefaultServiceError(Exception):
    """No routing rule matched and no default instance is configured."""

    def __init__(self, service_type: str, is_4k: bool) -> None:
        super().__init__(
            f"No default {service_type} instance configured for {'4K' if is_4k else 'non-4K'} content."
        )
        self.service_type = service_type
        self.is_4k = is_4k


@dataclass
class RouteParams:
    service_type: str
    is_4k: bool
    user_id: int
    genres: Sequence[int] = field(default_factory=list)
    language: Optional[str] = None
    keywords: Sequence[int] = field(default_factory=list)


@dataclass
class ResolvedRoute:
    service_id: int
    profile_id: Optional[int] = None
    root_folder: Optional[str] = None
    series_type: Optional[str] = None
    tags: Optional[List[int]] = None
    minimum_availability: Optional[str] = None
    rule_id: Optional[int] = None


def parse_id_list(value: Optional[str]) -> List[int]:
    """Parse a comma-separated id list, ignoring blank or non-numeric entries."""
    if not value:
        return []
    ids: List[int] = []
    for token in value.split(","):
        token = token.strip()
        if token.lstrip("-").isdigit():
            ids.append(int(token))
    return ids


def parse_language_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [code.strip() for code in value.split("|") if code.strip()]


def matches_all_conditions(rule: RoutingRule, params: RouteParams) -> bool:
    if rule.is_fallback or not rule.has_conditions():
        return True

    if rule.users and params.user_id not in parse_id_list(rule.users):
        return False
    if rule.genres and not set(parse_id_list(rule.genres)) & set(params.genres):
        return False
    if rule.languages and params.language not in parse_language_list(rule.languages):
        return False
    if rule.keywords and not set(parse_id_list(rule.keywords)) & set(params.keywords):
        return False
    return True


def route_from_rule(rule: RoutingRule) -> ResolvedRoute:
    return ResolvedRoute(
        service_id=rule.target_service_id,
        profile_id=rule.active_profile_id,
        root_folder=rule.root_folder,
        series_type=rule.series_type,
        tags=parse_id_list(rule.tags) if rule.tags else None,
        minimum_availability=rule.minimum_availability,
        rule_id=rule.id,
    )


async def resolve_route(session: AsyncSession, store: SettingsStore, params: RouteParams) -> ResolvedRoute:
    """Resolve the target instance and options for a request.

    Raises:
        NoDefaultServiceError: Nothing matched and no default instance exists
    """
    rules = await RoutingRuleRepository(session).list_for_service(params.service_type, params.is_4k)
    for rule in rules:
        if matches_all_conditions(rule, params):
            logger.debug(f"Routing rule matched: id={rule.id} name={rule.name} target={rule.target_service_id}")
            return route_from_rule(rule)

    logger.warning(
        f"No routing rules matched (including fallback rules) for {params.service_type} "
        f"is_4k={params.is_4k}. Falling back to settings default."
    )
    default = store.default_service(params.service_type, params.is_4k)
    if default is None:
        raise NoDefaultServiceError(params.service_type, params.is_4k)
    return ResolvedRoute(service_id=default.id)
