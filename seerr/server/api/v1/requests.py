"""
Media Request Endpoints.

Submit, list, inspect, approve, decline and delete media requests. Domain
errors raised by ``seerr.lib.media_requests`` are translated to HTTP status
codes here.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from seerr.core.database.entities import MediaRequest, User
from seerr.core.database.repositories import MediaRepository, UserRepository
from seerr.core.logging_config import get_logger
from seerr.core.models.domain import MediaRequestStatus
from seerr.core.models.io import (
    MediaRead,
    MediaRequestCreate,
    MediaRequestDecline,
    MediaRequestRead,
    Page,
    PageInfo,
    UserRead,
)
from seerr.core.permissions import Permission, has_permission
from seerr.lib import media_requests
from seerr.lib.media_requests import (
    BlocklistedMediaError,
    DuplicateMediaRequestError,
    MediaRequestNotFoundError,
    NoSeasonsAvailableError,
    QuotaRestrictedError,
    RequestPermissionError,
    UnsupportedMediaTypeError,
)
from seerr.providers import ExternalApiError, MediaNotFoundError
from seerr.server.services.auth import require_permission
from seerr.server.services.deps import CurrentUser, ProviderFactoryDep, SessionDep, SettingsDep

logger = get_logger(__name__)

router = APIRouter(tags=["requests"])

manage_requests = require_permission(Permission.MANAGE_REQUESTS)

RequestFilter = Literal[
    "all", "approved", "pending", "processing", "unavailable", "failed", "declined", "completed"
]


async def to_read(session: AsyncSession, request: MediaRequest) -> MediaRequestRead:
    """Serialize a request with its media and requesting user attached."""
    read = MediaRequestRead.model_validate(request)
    media = await MediaRepository(session).get_by_id(request.media_id)
    requested_by = await UserRepository(session).get_by_id(request.requested_by_id)
    read.media = MediaRead.model_validate(media) if media else None
    read.requested_by = UserRead.model_validate(requested_by) if requested_by else None
    return read


def _can_view_all(user: User) -> bool:
    return has_permission([Permission.MANAGE_REQUESTS, Permission.REQUEST_VIEW], user.permissions, check_type="or")


async def _get_visible_request(session: AsyncSession, request_id: int, user: User) -> MediaRequest:
    try:
        request = await media_requests.get_request(session, request_id)
    except MediaRequestNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if request.requested_by_id != user.id and not _can_view_all(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="You do not have permission to view this request."
        )
    return request


@router.get(
    "",
    response_model=Page[MediaRequestRead],
    summary="List Requests",
    description="Paged list of requests. Users without REQUEST_VIEW or MANAGE_REQUESTS only see their own.",
    responses={200: {"description": "Page of requests"}},
)
async def list_requests(
    session: SessionDep,
    user: CurrentUser,
    take: int = Query(default=10, ge=1, le=100),
    skip: int = Query(default=0, ge=0),
    filter_: RequestFilter = Query(default="all", alias="filter"),
    sort: Literal["added", "modified"] = Query(default="added"),
    requested_by: Optional[int] = Query(default=None, alias="requestedBy"),
    media_type: Literal["movie", "tv", "all"] = Query(default="all", alias="mediaType"),
) -> Page[MediaRequestRead]:
    """
    List media requests.

    - **filter**: Status filter (pending, approved, declined, ...).
    - **sort**: `added` (newest first) or `modified` (recently changed first).
    - **requestedBy**: Only requests by this user id.
    - **mediaType**: movie, tv or all.
    """
    requested_by_id = requested_by if _can_view_all(user) else user.id
    filters = {"filter": filter_, "sort": sort, "requested_by_id": requested_by_id, "type": media_type}
    listing = await media_requests.list_requests(session, filters, take=take, skip=skip)
    return Page[MediaRequestRead](
        page_info=PageInfo.build(listing.total, take, skip),
        results=[await to_read(session, request) for request in listing.requests],
    )


@router.post(
    "",
    response_model=MediaRequestRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Request",
    description="Request a movie or series. Auto-approved when the caller holds a matching auto-approve permission.",
    responses={
        201: {"description": "Request created"},
        202: {"description": "No seasons left to request"},
        400: {"description": "Unsupported media type"},
        403: {"description": "Missing request permission or quota exceeded"},
        404: {"description": "Title not found at the metadata provider"},
        409: {"description": "Duplicate request or blocklisted title"},
    },
)
async def create_request(
    body: MediaRequestCreate,
    session: SessionDep,
    store: SettingsDep,
    provider_factory: ProviderFactoryDep,
    user: CurrentUser,
) -> MediaRequestRead:
    """
    Create a media request.

    - **mediaType**: `movie` or `tv`.
    - **mediaId**: TMDb id of the title.
    - **seasons**: Season numbers or `"all"` (series only).
    - **is4k**: Request the 4K version.
    - **serverId**/**profileId**/**rootFolder**: Explicit target; routing rules pick one otherwise.
    - **userId**: Request on behalf of another user (needs MANAGE_USERS or MANAGE_REQUESTS).
    """
    try:
        request = await media_requests.create_request(session, store, body, user, provider_factory)
    except (RequestPermissionError, QuotaRestrictedError) as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except (DuplicateMediaRequestError, BlocklistedMediaError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except NoSeasonsAvailableError as e:
        raise HTTPException(status_code=status.HTTP_202_ACCEPTED, detail=str(e))
    except UnsupportedMediaTypeError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except MediaNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ExternalApiError as e:
        logger.error(f"Metadata lookup failed for {body.media_type.value} {body.media_id}: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Unable to retrieve media details.")
    return await to_read(session, request)


@router.get(
    "/{request_id}",
    response_model=MediaRequestRead,
    summary="Get Request",
    responses={403: {"description": "Not the owner"}, 404: {"description": "Request not found"}},
)
async def get_request(request_id: int, session: SessionDep, user: CurrentUser) -> MediaRequestRead:
    return await to_read(session, await _get_visible_request(session, request_id, user))


@router.post(
    "/{request_id}/approve",
    response_model=MediaRequestRead,
    summary="Approve Request",
    responses={404: {"description": "Request not found"}},
)
async def approve_request(
    request_id: int, session: SessionDep, user: User = Depends(manage_requests)
) -> MediaRequestRead:
    try:
        request = await media_requests.update_request_status(session, request_id, MediaRequestStatus.APPROVED, user)
    except MediaRequestNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return await to_read(session, request)


@router.post(
    "/{request_id}/decline",
    response_model=MediaRequestRead,
    summary="Decline Request",
    description="Decline a request with an optional reason shown to the requester.",
    responses={404: {"description": "Request not found"}},
)
async def decline_request(
    request_id: int,
    session: SessionDep,
    body: Optional[MediaRequestDecline] = None,
    user: User = Depends(manage_requests),
) -> MediaRequestRead:
    reason = body.reason if body else None
    try:
        request = await media_requests.update_request_status(
            session, request_id, MediaRequestStatus.DECLINED, user, reason=reason
        )
    except MediaRequestNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return await to_read(session, request)


@router.delete(
    "/{request_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Request",
    description="Delete a request. Owners may delete their own pending requests; managers may delete any.",
    responses={403: {"description": "Not allowed"}, 404: {"description": "Request not found"}},
)
async def delete_request(request_id: int, session: SessionDep, user: CurrentUser) -> None:
    try:
        await media_requests.delete_request(session, request_id, user)
    except MediaRequestNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RequestPermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
