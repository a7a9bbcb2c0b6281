"""
Blocklist Endpoints.

Blocklisted titles cannot be requested. Entries are addressed by TMDb id plus
the ``mediaType`` query parameter.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from seerr.core.database.entities import User
from seerr.core.database.repositories import BlocklistRepository
from seerr.core.models.domain import MediaType
from seerr.core.models.io import BlocklistCreate, BlocklistFilter, BlocklistRead, Page, PageInfo
from seerr.core.permissions import Permission
from seerr.lib.blocklist import BlocklistConflictError, BlocklistNotFoundError, add_to_blocklist, remove_from_blocklist
from seerr.server.services.auth import require_permission
from seerr.server.services.deps import SessionDep

router = APIRouter(tags=["blocklist"])

manage_blocklist = require_permission(Permission.MANAGE_BLOCKLIST)
view_blocklist = require_permission([Permission.MANAGE_BLOCKLIST, Permission.VIEW_BLOCKLIST], check_type="or")


def _require_media_type(media_type: Optional[str]) -> str:
    if media_type not in (MediaType.movie.value, MediaType.tv.value):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or missing mediaType query parameter."
        )
    return media_type


@router.get(
    "",
    response_model=Page[BlocklistRead],
    summary="List Blocklist",
    description="Paged blocklist, newest first, with optional title search and origin filter.",
    dependencies=[Depends(view_blocklist)],
)
async def list_blocklist(
    session: SessionDep,
    take: int = Query(default=25, ge=1),
    skip: int = Query(default=0, ge=0),
    search: Optional[str] = Query(default=None),
    filter_: BlocklistFilter = Query(default="all", alias="filter"),
) -> Page[BlocklistRead]:
    """
    List blocklisted titles.

    - **search**: Title substring.
    - **filter**: `all`, `manual` (added by hand) or `blocklistedTags` (added by tag).
    """
    filters = {"search": search, "manual": filter_ == "manual", "blocklisted_tags": filter_ == "blocklistedTags"}
    repo = BlocklistRepository(session)
    entries = await repo.list(limit=take, offset=skip, filters=filters)
    total = await repo.count(filters=filters)
    return Page[BlocklistRead](
        page_info=PageInfo.build(total, take, skip),
        results=[BlocklistRead.model_validate(entry) for entry in entries],
    )


@router.get(
    "/{tmdb_id}",
    response_model=BlocklistRead,
    summary="Get Blocklist Entry",
    responses={400: {"description": "Missing mediaType"}, 404: {"description": "Not blocklisted"}},
    dependencies=[Depends(manage_blocklist)],
)
async def get_blocklist_entry(
    tmdb_id: int,
    session: SessionDep,
    media_type: Optional[str] = Query(default=None, alias="mediaType"),
) -> BlocklistRead:
    entry = await BlocklistRepository(session).get_by_tmdb_id(tmdb_id, _require_media_type(media_type))
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blocklist entry not found.")
    return BlocklistRead.model_validate(entry)


@router.post(
    "",
    response_model=BlocklistRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add to Blocklist",
    responses={409: {"description": "Already blocklisted"}},
)
async def create_blocklist_entry(
    body: BlocklistCreate, session: SessionDep, user: User = Depends(manage_blocklist)
) -> BlocklistRead:
    """
    Blocklist a title.

    - **tmdbId**: TMDb id.
    - **mediaType**: `movie` or `tv`.
    - **title**: Title stored for display and search.
    - **user**: User recorded as the blocklister (defaults to the caller).
    """
    try:
        entry = await add_to_blocklist(
            session, body.media_type.value, body.tmdb_id, body.title, body.user if body.user is not None else user.id
        )
    except BlocklistConflictError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Item already blocklisted")
    return BlocklistRead.model_validate(entry)


@router.delete(
    "/{tmdb_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove from Blocklist",
    responses={400: {"description": "Missing mediaType"}, 404: {"description": "Not blocklisted"}},
    dependencies=[Depends(manage_blocklist)],
)
async def delete_blocklist_entry(
    tmdb_id: int,
    session: SessionDep,
    media_type: Optional[str] = Query(default=None, alias="mediaType"),
) -> Response:
    try:
        await remove_from_blocklist(session, tmdb_id, _require_media_type(media_type))
    except BlocklistNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
