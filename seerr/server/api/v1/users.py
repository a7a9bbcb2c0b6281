"""
User Management Endpoints.

CRUD for user accounts plus per-user quota status.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from seerr.core.database.entities import User, UserType
from seerr.core.database.repositories import UserRepository
from seerr.core.logging_config import get_logger
from seerr.core.models.io import Page, PageInfo, UserCreate, UserRead, UserUpdate
from seerr.core.permissions import Permission, has_permission
from seerr.lib.quota import QuotaResponse, get_quota
from seerr.server.services.auth import OWNER_USER_ID, require_permission
from seerr.server.services.deps import CurrentUser, SessionDep, SettingsDep

logger = get_logger(__name__)

router = APIRouter(tags=["users"])

manage_users = require_permission(Permission.MANAGE_USERS)


async def _get_user_or_404(repo: UserRepository, user_id: int) -> User:
    user = await repo.get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    return user


def _check_can_modify(actor: User, target: User) -> None:
    if has_permission(Permission.ADMIN, target.permissions) and not has_permission(Permission.ADMIN, actor.permissions):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="You do not have permission to modify this user."
        )


@router.get(
    "",
    response_model=Page[UserRead],
    summary="List Users",
    description="Paged list of users, optionally filtered by an email/username search.",
    responses={200: {"description": "Page of users"}, 403: {"description": "Missing MANAGE_USERS"}},
    dependencies=[Depends(manage_users)],
)
async def list_users(
    session: SessionDep,
    take: int = Query(default=20, ge=1, le=100),
    skip: int = Query(default=0, ge=0),
    q: Optional[str] = Query(default=None, description="Email or username search"),
) -> Page[UserRead]:
    repo = UserRepository(session)
    filters = {"q": q} if q else None
    users = await repo.list(limit=take, offset=skip, filters=filters)
    total = await repo.count(filters=filters)
    return Page[UserRead](
        page_info=PageInfo.build(total, take, skip),
        results=[UserRead.model_validate(user) for user in users],
    )


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    description="Create a local user. Permissions default to the configured default permissions.",
    responses={201: {"description": "User created"}, 409: {"description": "Email already in use"}},
    dependencies=[Depends(manage_users)],
)
async def create_user(body: UserCreate, session: SessionDep, store: SettingsDep) -> UserRead:
    """
    Create a new local user.

    - **email**: Login email, unique and stored lowercase.
    - **username**: Optional display name.
    - **permissions**: Permission bitmask; defaults to `main.defaultPermissions`.
    """
    repo = UserRepository(session)
    if await repo.get_by_email(body.email) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists with submitted email.")

    permissions = body.permissions if body.permissions is not None else store.main.default_permissions
    user = await repo.create(
        User(email=body.email, username=body.username, permissions=permissions, user_type=int(UserType.LOCAL))
    )
    logger.info(f"Created user {user.id} ({user.email})")
    return UserRead.model_validate(user)


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get User",
    responses={404: {"description": "User not found"}},
    dependencies=[Depends(manage_users)],
)
async def get_user(user_id: int, session: SessionDep) -> UserRead:
    return UserRead.model_validate(await _get_user_or_404(UserRepository(session), user_id))


@router.put(
    "/{user_id}",
    response_model=UserRead,
    summary="Update User",
    description="Update profile fields, permissions, rating limits and quota overrides.",
    responses={403: {"description": "Target is an admin and caller is not"}, 404: {"description": "User not found"}},
)
async def update_user(
    user_id: int,
    body: UserUpdate,
    session: SessionDep,
    actor: User = Depends(manage_users),
) -> UserRead:
    """
    Update a user.

    Only fields present in the body are changed. The owner account always
    keeps its ADMIN permission.
    """
    repo = UserRepository(session)
    user = await _get_user_or_404(repo, user_id)
    _check_can_modify(actor, user)

    changes = body.model_dump(exclude_unset=True)
    for required in ("email", "permissions"):
        if changes.get(required) is None:
            changes.pop(required, None)
    if "email" in changes:
        other = await repo.get_by_email(changes["email"])
        if other is not None and other.id != user.id:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists with submitted email.")
        changes["email"] = changes["email"].lower()
    if user.id == OWNER_USER_ID and "permissions" in changes:
        changes["permissions"] = int(changes["permissions"]) | int(Permission.ADMIN)

    for key, value in changes.items():
        setattr(user, key, value)
    user = await repo.update(user)
    return UserRead.model_validate(user)


@router.delete(
    "/{user_id}",
    response_model=UserRead,
    summary="Delete User",
    responses={
        403: {"description": "Target is an admin and caller is not"},
        404: {"description": "User not found"},
        405: {"description": "The owner account cannot be deleted"},
    },
)
async def delete_user(user_id: int, session: SessionDep, actor: User = Depends(manage_users)) -> UserRead:
    repo = UserRepository(session)
    user = await _get_user_or_404(repo, user_id)
    if user.id == OWNER_USER_ID:
        raise HTTPException(status_code=status.HTTP_405_METHOD_NOT_ALLOWED, detail="The owner account cannot be deleted.")
    _check_can_modify(actor, user)

    deleted = UserRead.model_validate(user)
    await repo.delete(user.id)
    logger.info(f"Deleted user {user_id}")
    return deleted


@router.get(
    "/{user_id}/quota",
    response_model=QuotaResponse,
    summary="Get User Quota",
    description="Quota mode, limits and usage for a user. Users may read their own quota.",
    responses={403: {"description": "Neither self nor MANAGE_USERS"}, 404: {"description": "User not found"}},
)
async def get_user_quota(user_id: int, session: SessionDep, store: SettingsDep, actor: CurrentUser) -> QuotaResponse:
    if actor.id != user_id and not has_permission(Permission.MANAGE_USERS, actor.permissions):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="You do not have permission to view this user's quota."
        )
    user = await _get_user_or_404(UserRepository(session), user_id)
    return await get_quota(session, user, store)
