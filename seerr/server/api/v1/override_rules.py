"""
Override Rule Endpoints.

CRUD for legacy override rules and a preview endpoint showing which
overrides would apply to a request.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from seerr.core.database.entities import OverrideRule
from seerr.core.database.repositories import OverrideRuleRepository, UserRepository
from seerr.core.logging_config import get_logger
from seerr.core.models.io import AdvancedRequestQuery, OverrideRuleRead, OverrideRulesResultRead, OverrideRuleWrite
from seerr.core.permissions import Permission
from seerr.lib.media_requests import lookup_details
from seerr.lib.override_rules import apply_override_rules
from seerr.providers import ExternalApiError
from seerr.server.services.auth import require_permission
from seerr.server.services.deps import ProviderFactoryDep, SessionDep, SettingsDep

logger = get_logger(__name__)

router = APIRouter(tags=["override-rules"])

admin = require_permission(Permission.ADMIN)


async def _get_rule_or_404(repo: OverrideRuleRepository, rule_id: int) -> OverrideRule:
    rule = await repo.get_by_id(rule_id)
    if rule is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Override Rule not found.")
    return rule


@router.get(
    "",
    response_model=List[OverrideRuleRead],
    summary="List Override Rules",
    dependencies=[Depends(admin)],
)
async def list_override_rules(session: SessionDep) -> List[OverrideRuleRead]:
    rules = await OverrideRuleRepository(session).list()
    return [OverrideRuleRead.model_validate(rule) for rule in rules]


@router.post(
    "",
    response_model=OverrideRuleRead,
    summary="Create Override Rule",
    description="Create an override rule attached to a Radarr or Sonarr instance index.",
    dependencies=[Depends(admin)],
)
async def create_override_rule(body: OverrideRuleWrite, session: SessionDep) -> OverrideRuleRead:
    rule = await OverrideRuleRepository(session).create(OverrideRule(**body.model_dump()))
    return OverrideRuleRead.model_validate(rule)


@router.post(
    "/advancedRequest",
    response_model=OverrideRulesResultRead,
    summary="Preview Overrides",
    description="Root folder, profile and tags the override rules would apply to a request for the given user.",
    responses={404: {"description": "User or media not found"}},
    dependencies=[Depends(require_permission(Permission.REQUEST_ADVANCED))],
)
async def advanced_request(
    body: AdvancedRequestQuery,
    session: SessionDep,
    store: SettingsDep,
    provider_factory: ProviderFactoryDep,
) -> OverrideRulesResultRead:
    """
    Preview override rules.

    - **mediaType**: `movie` or `tv`.
    - **tmdbId**: TMDb id of the title.
    - **is4k**: Evaluate against the 4K default instance.
    - **requestUser**: Id of the user the request is made for.
    """
    user = await UserRepository(session).get_by_id(body.request_user)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")

    try:
        details = await lookup_details(provider_factory, store, body.media_type.value, body.tmdb_id)
    except ExternalApiError as e:
        logger.warning(f"Override preview lookup failed for {body.media_type.value} {body.tmdb_id}: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media not found")

    result = await apply_override_rules(session, store, body.media_type.value, body.is_4k, details, user)
    return OverrideRulesResultRead.model_validate(result)


@router.put(
    "/{rule_id}",
    response_model=OverrideRuleRead,
    summary="Replace Override Rule",
    description="Replace every field of an override rule; omitted fields are cleared.",
    responses={404: {"description": "Rule not found"}},
    dependencies=[Depends(admin)],
)
async def update_override_rule(rule_id: int, body: OverrideRuleWrite, session: SessionDep) -> OverrideRuleRead:
    repo = OverrideRuleRepository(session)
    rule = await _get_rule_or_404(repo, rule_id)
    for key, value in body.model_dump().items():
        setattr(rule, key, value)
    rule = await repo.update(rule)
    return OverrideRuleRead.model_validate(rule)


@router.delete(
    "/{rule_id}",
    response_model=OverrideRuleRead,
    summary="Delete Override Rule",
    responses={404: {"description": "Rule not found"}},
    dependencies=[Depends(admin)],
)
async def delete_override_rule(rule_id: int, session: SessionDep) -> OverrideRuleRead:
    repo = OverrideRuleRepository(session)
    rule = await _get_rule_or_404(repo, rule_id)
    deleted = OverrideRuleRead.model_validate(rule)
    await repo.delete(rule_id)
    return deleted
