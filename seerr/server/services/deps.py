"""
Shared endpoint dependencies.

Annotated aliases for the database session, the settings store, the
metadata-provider factory and the authenticated user.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from seerr.core.database import get_session
from seerr.core.database.entities import User
from seerr.core.permissions import Permission
from seerr.core.settings import SettingsStore
from seerr.lib.media_requests import ProviderFactory
from seerr.providers import get_metadata_provider

from .auth import get_current_user, get_settings_store, require_permission


def get_provider_factory() -> ProviderFactory:
    return get_metadata_provider


SessionDep = Annotated[AsyncSession, Depends(get_session)]
SettingsDep = Annotated[SettingsStore, Depends(get_settings_store)]
ProviderFactoryDep = Annotated[ProviderFactory, Depends(get_provider_factory)]
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_permission(Permission.ADMIN))]
