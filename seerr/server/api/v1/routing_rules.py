"""
Routing Rule Endpoints.

Administer the rules that route requests to Radarr/Sonarr instances.
Listing order is fallbacks last, then descending priority.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from seerr.core.database.repositories import RoutingRuleRepository
from seerr.core.models.io import RoutingRuleCreate, RoutingRuleRead, RoutingRuleReorder, RoutingRuleUpdate
from seerr.core.permissions import Permission
from seerr.server.services import routing_rules as service
from seerr.server.services.auth import require_permission
from seerr.server.services.deps import SessionDep, SettingsDep

router = APIRouter(tags=["routing-rules"], dependencies=[Depends(require_permission(Permission.ADMIN))])


def _http_error(e: service.RoutingRuleError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


@router.get(
    "",
    response_model=List[RoutingRuleRead],
    summary="List Routing Rules",
    description="All routing rules, fallbacks last and higher priorities first.",
)
async def list_routing_rules(session: SessionDep) -> List[RoutingRuleRead]:
    rules = await RoutingRuleRepository(session).list()
    return [RoutingRuleRead.model_validate(rule) for rule in rules]


@router.post(
    "",
    response_model=RoutingRuleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Routing Rule",
    description="Create a routing rule. 4K is derived from the target instance.",
    responses={
        201: {"description": "Rule created"},
        400: {"description": "Invalid rule"},
        409: {"description": "A fallback rule already exists for this service type and quality"},
    },
)
async def create_routing_rule(body: RoutingRuleCreate, session: SessionDep, store: SettingsDep) -> RoutingRuleRead:
    """
    Create a routing rule.

    - **serviceType**: `radarr` or `sonarr`.
    - **targetServiceId**: Instance id from the settings file.
    - **isFallback**: Catch-all rule for the default instance; needs rootFolder,
      activeProfileId and (radarr) minimumAvailability. Conditions are cleared.
    - **users**/**genres**/**keywords**: Comma-separated ids; **languages**: `|`-separated codes.
      Non-fallback rules need at least one of them.
    """
    try:
        rule = await service.create_routing_rule(session, store, body)
    except service.RoutingRuleError as e:
        raise _http_error(e)
    return RoutingRuleRead.model_validate(rule)


@router.post(
    "/reorder",
    response_model=List[RoutingRuleRead],
    summary="Reorder Routing Rules",
    description="Reassign priorities from an ordered list of rule ids (first is highest). Fallback rules are ignored.",
    responses={400: {"description": "Too many rule ids"}},
)
async def reorder_routing_rules(body: RoutingRuleReorder, session: SessionDep) -> List[RoutingRuleRead]:
    try:
        rules = await service.reorder_routing_rules(session, body.rule_ids)
    except service.RoutingRuleError as e:
        raise _http_error(e)
    return [RoutingRuleRead.model_validate(rule) for rule in rules]


@router.put(
    "/{rule_id}",
    response_model=RoutingRuleRead,
    summary="Update Routing Rule",
    responses={
        400: {"description": "Invalid rule"},
        404: {"description": "Rule not found"},
        409: {"description": "A fallback rule already exists for this service type and quality"},
    },
)
async def update_routing_rule(
    rule_id: int, body: RoutingRuleUpdate, session: SessionDep, store: SettingsDep
) -> RoutingRuleRead:
    try:
        rule = await service.update_routing_rule(session, store, rule_id, body)
    except service.RoutingRuleNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Routing rule not found.")
    except service.RoutingRuleError as e:
        raise _http_error(e)
    return RoutingRuleRead.model_validate(rule)


@router.delete(
    "/{rule_id}",
    response_model=RoutingRuleRead,
    summary="Delete Routing Rule",
    responses={404: {"description": "Rule not found"}},
)
async def delete_routing_rule(rule_id: int, session: SessionDep) -> RoutingRuleRead:
    repo = RoutingRuleRepository(session)
    rule = await repo.get_by_id(rule_id)
    if rule is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Routing rule not found.")
    deleted = RoutingRuleRead.model_validate(rule)
    await repo.delete(rule_id)
    return deleted
