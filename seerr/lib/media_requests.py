"""
Media request pipeline.

``create_request`` validates a request against permissions, quotas, the
blocklist and existing requests, applies override and routing rules, and
stores the request as approved or pending depending on the caller's
auto-approve permissions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from seerr.core.database.entities import Media, MediaRequest, User
from seerr.core.database.repositories import MediaRepository, MediaRequestRepository, UserRepository
from seerr.core.database.repositories.media_requests import REQUEST_FILTERS
from seerr.core.logging_config import get_logger
from seerr.core.models.domain import MediaRequestStatus, MediaStatus, MediaType
from seerr.core.models.io import MediaRequestCreate
from seerr.core.monitoring import log_request_event
from seerr.core.permissions import Permission, has_permission
from seerr.core.settings import SettingsStore
from seerr.providers import MediaDetails, MetadataProvider, get_metadata_provider

from .content_filtering import (
    get_movie_certification,
    get_tv_certification,
    is_movie_rating_allowed,
    is_tv_rating_allowed,
)
from .override_rules import apply_override_rules
from .quota import get_quota
from .routing_resolver import NoDefaultServiceError, RouteParams, resolve_route

logger = get_logger(__name__)

ProviderFactory = Callable[..., MetadataProvider]


class RequestPermissionError(Exception):
    """The user may not make this request."""


class QuotaRestrictedError(Exception):
    """The user's request quota is used up."""


class DuplicateMediaRequestError(Exception):
    """An equivalent request already exists."""


class NoSeasonsAvailableError(Exception):
    """Every requested season is already requested or available."""


class BlocklistedMediaError(Exception):
    """The title is on the blocklist."""


class UnsupportedMediaTypeError(Exception):
    """The media type cannot be requested through this server."""


class MediaRequestNotFoundError(Exception):
    def __init__(self, request_id: int) -> None:
        super().__init__(f"Request {request_id} not found.")
        self.request_id = request_id


def _auto_approve_permissions(media_type: str, is_4k: bool) -> List[Permission]:
    if media_type == MediaType.movie:
        specific = Permission.AUTO_APPROVE_4K_MOVIE if is_4k else Permission.AUTO_APPROVE_MOVIE
    else:
        specific = Permission.AUTO_APPROVE_4K_TV if is_4k else Permission.AUTO_APPROVE_TV
    general = Permission.AUTO_APPROVE_4K if is_4k else Permission.AUTO_APPROVE
    return [general, specific, Permission.MANAGE_REQUESTS]


def _request_permissions(media_type: str, is_4k: bool) -> List[Permission]:
    if media_type == MediaType.movie:
        return [Permission.REQUEST_4K, Permission.REQUEST_4K_MOVIE] if is_4k else [Permission.REQUEST, Permission.REQUEST_MOVIE]
    return [Permission.REQUEST_4K, Permission.REQUEST_4K_TV] if is_4k else [Permission.REQUEST, Permission.REQUEST_TV]


def _check_rating(user: User, media_type: str, details: MediaDetails) -> None:
    if media_type == MediaType.movie and user.max_movie_rating:
        if details.adult or not is_movie_rating_allowed(get_movie_certification(details), user.max_movie_rating):
            raise RequestPermissionError("This title exceeds your content rating limit.")
    if media_type == MediaType.tv and user.max_tv_rating:
        if not is_tv_rating_allowed(get_tv_certification(details), user.max_tv_rating):
            raise RequestPermissionError("This title exceeds your content rating limit.")


async def _fetch_details(
    provider_factory: ProviderFactory, store: SettingsStore, category: str, media_type: str, media_id: int
) -> MediaDetails:
    provider = provider_factory(category, store)
    try:
        if media_type == MediaType.movie:
            return await provider.get_movie(media_id)
        return await provider.get_tv_show(media_id)
    finally:
        await provider.close()


async def lookup_details(
    provider_factory: ProviderFactory, store: SettingsStore, media_type: str, media_id: int
) -> MediaDetails:
    """Fetch a title from the provider configured for its category.

    Series carrying the TMDb anime keyword are looked up again with the anime
    provider when it differs from the series one.
    """
    details = await _fetch_details(provider_factory, store, media_type, media_type, media_id)
    metadata = store.metadata_settings
    if details.is_anime and metadata.anime != metadata.tv:
        logger.debug(f"Series {media_id} is anime, using the {metadata.anime.value} provider")
        details = await _fetch_details(provider_factory, store, "anime", media_type, media_id)
    return details


def _requested_seasons(
    body: MediaRequestCreate, details: MediaDetails, store: SettingsStore, existing: List[MediaRequest]
) -> List[int]:
    if body.seasons == "all" or body.seasons is None:
        seasons = [season.season_number for season in details.seasons if season.season_number != 0]
    else:
        seasons = list(body.seasons)
    if not store.main.enable_special_episodes:
        seasons = [number for number in seasons if number > 0]

    taken = {
        number
        for request in existing
        if request.is_4k == body.is_4k
        and request.status not in (MediaRequestStatus.DECLINED, MediaRequestStatus.COMPLETED)
        for number in request.seasons or []
    }
    return [number for number in dict.fromkeys(seasons) if number not in taken]


async def create_request(
    session: AsyncSession,
    store: SettingsStore,
    body: MediaRequestCreate,
    user: User,
    provider_factory: ProviderFactory = get_metadata_provider,
    *,
    is_auto_request: bool = False,
) -> MediaRequest:
    """Create a media request.

    Args:
        session: Database session
        store: Settings store
        body: Request payload
        user: Authenticated caller
        provider_factory: Builds the metadata provider for a media type
        is_auto_request: Request created by a watchlist sync rather than a person

    Returns:
        The stored MediaRequest

    Raises:
        RequestPermissionError: Missing request permission or rating limit exceeded
        QuotaRestrictedError: Quota used up
        BlocklistedMediaError: Title is blocklisted
        DuplicateMediaRequestError: Equivalent request exists
        NoSeasonsAvailableError: Nothing left to request for a series
        UnsupportedMediaTypeError: Book requests
    """
    if body.media_type == MediaType.book:
        raise UnsupportedMediaTypeError("Book requests are not supported.")

    request_user = user
    if body.user_id:
        if not has_permission([Permission.MANAGE_USERS, Permission.MANAGE_REQUESTS], user.permissions):
            raise RequestPermissionError("You do not have permission to modify the request user.")
        request_user = await UserRepository(session).get_by_id(body.user_id)
        if request_user is None:
            raise RequestPermissionError(f"User {body.user_id} does not exist.")

    media_type = body.media_type.value
    if not has_permission(_request_permissions(media_type, body.is_4k), request_user.permissions, check_type="or"):
        label = "movie" if media_type == MediaType.movie else "series"
        raise RequestPermissionError(
            f"You do not have permission to make {'4K ' if body.is_4k else ''}{label} requests."
        )

    quota = await get_quota(session, request_user, store)
    if media_type == MediaType.movie and quota.movie.restricted:
        raise QuotaRestrictedError("Movie Quota exceeded.")
    if media_type == MediaType.tv and quota.tv.restricted:
        raise QuotaRestrictedError("Series Quota exceeded.")
    if quota.combined.restricted:
        raise QuotaRestrictedError("Request Quota exceeded.")

    details = await lookup_details(provider_factory, store, media_type, body.media_id)
    _check_rating(request_user, media_type, details)

    media_repo = MediaRepository(session)
    media = await media_repo.get_by_tmdb_id(details.id, media_type)
    if media is None:
        media = Media(
            media_type=media_type,
            tmdb_id=details.id,
            tvdb_id=body.tvdb_id or details.external_ids.tvdb_id,
            imdb_id=details.external_ids.imdb_id,
            status=int(MediaStatus.UNKNOWN if body.is_4k else MediaStatus.PENDING),
            status_4k=int(MediaStatus.PENDING if body.is_4k else MediaStatus.UNKNOWN),
        )
    else:
        if media.status == MediaStatus.BLOCKLISTED:
            logger.warning(f"Request for media blocked due to being blocklisted: tmdb_id={details.id} type={media_type}")
            raise BlocklistedMediaError("This media is blocklisted.")
        if media.status == MediaStatus.UNKNOWN and not body.is_4k:
            media.status = int(MediaStatus.PENDING)
        if media.status_4k == MediaStatus.UNKNOWN and body.is_4k:
            media.status_4k = int(MediaStatus.PENDING)

    request_repo = MediaRequestRepository(session)
    existing = await request_repo.list_for_media(media.id, is_4k=body.is_4k) if media.id else []
    if existing:
        if media_type == MediaType.movie and existing[0].status != MediaRequestStatus.DECLINED:
            logger.warning(f"Duplicate request for media blocked: tmdb_id={details.id} is_4k={body.is_4k}")
            raise DuplicateMediaRequestError("Request for this media already exists.")
        if any(r.requested_by_id == request_user.id and r.is_auto_request for r in existing):
            raise DuplicateMediaRequestError("Auto-request for this media and user already exists.")

    seasons: List[int] = []
    if media_type == MediaType.tv:
        all_existing = await request_repo.list_for_media(media.id) if media.id else []
        seasons = _requested_seasons(body, details, store, all_existing)
        if not seasons:
            raise NoSeasonsAvailableError("No seasons available to request")
        if quota.tv.limit and len(seasons) > (quota.tv.remaining or 0):
            raise QuotaRestrictedError("Series Quota exceeded.")

    root_folder, profile_id, tags = body.root_folder, body.profile_id, body.tags
    if not has_permission(Permission.MANAGE_REQUESTS, user.permissions, check_type="or"):
        overrides = await apply_override_rules(session, store, media_type, body.is_4k, details, request_user)
        root_folder = overrides.root_folder or root_folder
        profile_id = overrides.profile_id or profile_id
        if overrides.tags:
            tags = list(dict.fromkeys([*(tags or []), *overrides.tags]))

    server_id = body.server_id
    if server_id is None:
        server_id, routed = await _route(session, store, media_type, body.is_4k, request_user, details)
        root_folder = root_folder or routed.get("root_folder")
        profile_id = profile_id or routed.get("profile_id")
        tags = tags or routed.get("tags")

    approved = has_permission(_auto_approve_permissions(media_type, body.is_4k), user.permissions, check_type="or")
    media = await media_repo.update(media) if media.id else await media_repo.create(media)
    request = MediaRequest(
        type=media_type,
        media_id=media.id,
        requested_by_id=request_user.id,
        modified_by_id=user.id if approved else None,
        status=int(MediaRequestStatus.APPROVED if approved else MediaRequestStatus.PENDING),
        is_4k=body.is_4k,
        is_auto_request=is_auto_request,
        server_id=server_id,
        profile_id=profile_id,
        root_folder=root_folder,
        language_profile_id=body.language_profile_id,
        tags=tags or [],
        seasons=seasons,
    )
    request = await request_repo.create(request)
    logger.info(
        f"Request {request.id} created: type={media_type} tmdb_id={details.id} user={request_user.id} "
        f"status={MediaRequestStatus(request.status).name}"
    )
    log_request_event("created", request.id, {"media_type": media_type, "is_4k": body.is_4k})
    return request


async def _route(
    session: AsyncSession, store: SettingsStore, media_type: str, is_4k: bool, user: User, details: MediaDetails
) -> Tuple[Optional[int], Dict[str, Any]]:
    params = RouteParams(
        service_type="radarr" if media_type == MediaType.movie else "sonarr",
        is_4k=is_4k,
        user_id=user.id,
        genres=details.genre_ids,
        language=details.original_language,
        keywords=details.keyword_ids,
    )
    try:
        route = await resolve_route(session, store, params)
    except NoDefaultServiceError as e:
        logger.warning(f"{e} The request is stored without a target server.")
        return None, {}
    return route.service_id, {"root_folder": route.root_folder, "profile_id": route.profile_id, "tags": route.tags}


async def get_request(session: AsyncSession, request_id: int) -> MediaRequest:
    request = await MediaRequestRepository(session).get_by_id(request_id)
    if request is None:
        raise MediaRequestNotFoundError(request_id)
    return request


async def update_request_status(
    session: AsyncSession,
    request_id: int,
    status: MediaRequestStatus,
    user: User,
    reason: Optional[str] = None,
) -> MediaRequest:
    """Approve or decline a request.

    Declining a request whose media has no other active request resets the
    media status for that quality to UNKNOWN.
    """
    request_repo = MediaRequestRepository(session)
    request = await get_request(session, request_id)
    request.status = int(status)
    request.modified_by_id = user.id
    request.decline_reason = reason if status == MediaRequestStatus.DECLINED else None
    request = await request_repo.update(request)

    if status == MediaRequestStatus.DECLINED:
        await _reset_media_status(session, request)

    logger.info(f"Request {request.id} set to {status.name} by user {user.id}")
    log_request_event(status.name.lower(), request.id)
    return request


async def _reset_media_status(session: AsyncSession, request: MediaRequest) -> None:
    media_repo = MediaRepository(session)
    media = await media_repo.get_by_id(request.media_id)
    if media is None:
        return
    others = await MediaRequestRepository(session).list_for_media(media.id, is_4k=request.is_4k)
    if any(r.id != request.id and r.status != MediaRequestStatus.DECLINED for r in others):
        return
    field = "status_4k" if request.is_4k else "status"
    if getattr(media, field) == MediaStatus.PENDING:
        setattr(media, field, int(MediaStatus.UNKNOWN))
        await media_repo.update(media)


@dataclass
class RequestListing:
    requests: List[MediaRequest]
    total: int


async def list_requests(
    session: AsyncSession,
    filters: Optional[Dict[str, Any]] = None,
    take: int = 10,
    skip: int = 0,
) -> RequestListing:
    """List requests.

    Args:
        session: Database session
        filters: ``filter`` (a key of REQUEST_FILTERS), ``sort``,
            ``requested_by_id`` and ``type`` ("all" disables the type filter)
        take: Page size
        skip: Records to skip

    Returns:
        The page of requests and the total count
    """
    filters = dict(filters or {})
    statuses = REQUEST_FILTERS.get(filters.pop("filter", "all") or "all")
    if statuses:
        filters["statuses"] = statuses
    if filters.get("type") == "all":
        filters.pop("type")
    repo = MediaRequestRepository(session)
    requests = await repo.list(limit=take, offset=skip, filters=filters)
    total = await repo.count(filters=filters)
    return RequestListing(requests=requests, total=total)


async def delete_request(session: AsyncSession, request_id: int, user: User) -> None:
    """Delete a request. Owners may delete their own pending requests."""
    request = await get_request(session, request_id)
    is_manager = has_permission(Permission.MANAGE_REQUESTS, user.permissions)
    if not is_manager and (request.requested_by_id != user.id or request.status != MediaRequestStatus.PENDING):
        raise RequestPermissionError("You do not have permission to delete this request.")

    await _reset_media_status(session, request)
    await MediaRequestRepository(session).delete(request.id)
    logger.info(f"Request {request_id} deleted by user {user.id}")
