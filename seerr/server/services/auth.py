"""
API key authentication.

A request is authenticated when its ``X-Api-Key`` header equals the API key
in the settings file. It then acts as the owner account (user 1) or, when an
``X-Api-User`` header is present, as that user.
"""

import secrets
from typing import Iterable, Optional, Union

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from seerr.core.database import get_session
from seerr.core.database.entities import User
from seerr.core.database.repositories import UserRepository
from seerr.core.logging_config import get_logger
from seerr.core.permissions import CheckType, Permission, has_permission
from seerr.core.settings import SettingsStore, get_settings

logger = get_logger(__name__)

OWNER_USER_ID = 1


class AuthError(Exception):
    """Authentication or authorization failure rendered as ``{"status", "error"}``."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def get_settings_store() -> SettingsStore:
    return get_settings()


async def get_current_user(
    session: AsyncSession = Depends(get_session),
    store: SettingsStore = Depends(get_settings_store),
    x_api_key: Optional[str] = Header(default=None),
    x_api_user: Optional[str] = Header(default=None),
) -> User:
    """Resolve the caller from the API key headers.

    Raises:
        AuthError: 401 when the key is missing or wrong or the user does not exist
    """
    api_key = store.main.api_key
    if not x_api_key or not api_key or not secrets.compare_digest(x_api_key, api_key):
        raise AuthError(401, "You do not have permission to access this endpoint")

    user_id = OWNER_USER_ID
    if x_api_user:
        if not x_api_user.isdigit():
            raise AuthError(401, "Invalid X-Api-User header")
        user_id = int(x_api_user)

    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        logger.warning(f"API key used for unknown user {user_id}")
        raise AuthError(401, "You do not have permission to access this endpoint")
    return user


def require_permission(
    permissions: Union[Permission, Iterable[Permission]] = Permission.NONE,
    check_type: CheckType = "and",
):
    """Dependency factory: the authenticated user must hold ``permissions``.

    Raises:
        AuthError: 403 when the permission check fails
    """
    required = list(permissions) if not isinstance(permissions, Permission) else [permissions]

    async def dependency(user: User = Depends(get_current_user)) -> User:
        if not has_permission(required, user.permissions, check_type=check_type):
            raise AuthError(403, "You do not have permission to access this endpoint")
        return user

    return dependency
