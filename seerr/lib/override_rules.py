"""
Override rule application.

Legacy override rules attach to the default Radarr/Sonarr instance by list
index. The most specific matching rule (most of genre, language and keywords
set) supplies root folder, quality profile and tags.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from seerr.core.database.entities import OverrideRule, User
from seerr.core.database.repositories import OverrideRuleRepository
from seerr.core.logging_config import get_logger
from seerr.core.models.domain import ANIME_KEYWORD_ID, MediaType
from seerr.core.settings import SettingsStore
from seerr.providers import MediaDetails

from .routing_resolver import parse_id_list, parse_language_list

logger = get_logger(__name__)


@dataclass
class OverrideRulesResult:
    root_folder: Optional[str] = None
    profile_id: Optional[int] = None
    tags: Optional[List[int]] = None


def default_service_index(services, is_4k: bool) -> int:
    """Index of the default instance for the quality, -1 when there is none."""
    return next((i for i, s in enumerate(services) if s.is_default and s.is_4k == is_4k), -1)


def rule_matches(rule: OverrideRule, media_type: str, media: MediaDetails, user_id: Optional[int]) -> bool:
    keyword_ids = media.keyword_ids
    rule_keywords = parse_id_list(rule.keywords)

    # Anime series are routed by the instance's anime settings unless a rule targets the anime keyword.
    if media_type == MediaType.tv and ANIME_KEYWORD_ID in keyword_ids and ANIME_KEYWORD_ID not in rule_keywords:
        return False
    if rule.users and user_id not in parse_id_list(rule.users):
        return False
    if rule.genre and not set(parse_id_list(rule.genre)) & set(media.genre_ids):
        return False
    if rule.language and media.original_language not in parse_language_list(rule.language):
        return False
    if rule.keywords and not set(rule_keywords) & set(keyword_ids):
        return False
    return True


async def apply_override_rules(
    session: AsyncSession,
    store: SettingsStore,
    media_type: str,
    is_4k: bool,
    media: MediaDetails,
    request_user: User,
) -> OverrideRulesResult:
    """Pick the most specific override rule for a request and return its overrides."""
    if media_type == MediaType.movie:
        filters = {"radarr_service_id": default_service_index(store.radarr, is_4k)}
    else:
        filters = {"sonarr_service_id": default_service_index(store.sonarr, is_4k)}
    rules = await OverrideRuleRepository(session).list(filters=filters)

    applied = [rule for rule in rules if rule_matches(rule, media_type, media, request_user.id)]
    result = OverrideRulesResult()
    if not applied:
        return result

    # sorted() is stable: equally specific rules keep id order
    rule = sorted(applied, key=lambda r: r.specificity(), reverse=True)[0]
    if rule.root_folder:
        result.root_folder = rule.root_folder
    if rule.profile_id:
        result.profile_id = rule.profile_id
    if rule.tags:
        result.tags = list(dict.fromkeys(parse_id_list(rule.tags)))
    logger.debug(f"Override rule {rule.id} applied")
    return result
