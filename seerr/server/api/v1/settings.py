"""
Settings Endpoints.

Read and update sections of the settings file. Everything except the public
settings requires ADMIN.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError

from seerr.core.logging_config import get_logger
from seerr.core.models.io import MetadataSettingsUpdate
from seerr.core.permissions import Permission
from seerr.core.settings import FullPublicSettings, MainSettings, MetadataSettings, deep_merge
from seerr.lib.url_validation import is_valid_url
from seerr.server.services.auth import require_permission
from seerr.server.services.deps import SettingsDep

logger = get_logger(__name__)

router = APIRouter(tags=["settings"])

admin = require_permission(Permission.ADMIN)

# Keys in POST /settings/main that are managed by dedicated endpoints
_READ_ONLY_MAIN_KEYS = ("apiKey", "api_key")


@router.get(
    "/main",
    response_model=MainSettings,
    summary="Get Main Settings",
    dependencies=[Depends(admin)],
)
async def get_main_settings(store: SettingsDep) -> MainSettings:
    return store.main


@router.post(
    "/main",
    response_model=MainSettings,
    summary="Update Main Settings",
    description="Merge the posted fields into the main settings section and save the file. The API key is ignored.",
    responses={400: {"description": "Invalid field value or URL"}},
    dependencies=[Depends(admin)],
)
async def update_main_settings(store: SettingsDep, body: Dict[str, Any] = Body(...)) -> MainSettings:
    changes = {key: value for key, value in body.items() if key not in _READ_ONLY_MAIN_KEYS}
    try:
        main = MainSettings.model_validate(deep_merge(store.main.model_dump(mode="json", by_alias=True), changes))
    except ValidationError as e:
        problems = "; ".join(f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors())
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=problems)

    for name, value in (("applicationUrl", main.application_url), ("youtubeUrl", main.youtube_url)):
        if not is_valid_url(value):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid URL for {name}.")

    store.main = main
    store.save()
    logger.info(f"Main settings updated: {sorted(changes)}")
    return store.main


@router.post(
    "/main/regenerate",
    response_model=MainSettings,
    summary="Regenerate API Key",
    description="Replace the API key with a newly generated one. Clients using the old key stop working.",
    dependencies=[Depends(admin)],
)
async def regenerate_api_key(store: SettingsDep) -> MainSettings:
    main = store.regenerate_api_key()
    logger.info("API key regenerated")
    return main


@router.get(
    "/metadata",
    response_model=MetadataSettings,
    summary="Get Metadata Settings",
    dependencies=[Depends(admin)],
)
async def get_metadata_settings(store: SettingsDep) -> MetadataSettings:
    return store.metadata_settings


@router.put(
    "/metadata",
    response_model=MetadataSettings,
    summary="Update Metadata Settings",
    description="Choose TMDb or TheTVDB as the metadata source for series and anime.",
    dependencies=[Depends(admin)],
)
async def update_metadata_settings(body: MetadataSettingsUpdate, store: SettingsDep) -> MetadataSettings:
    current = store.metadata_settings
    store.metadata_settings = MetadataSettings(
        tv=body.tv if body.tv is not None else current.tv,
        anime=body.anime if body.anime is not None else current.anime,
    )
    store.save()
    return store.metadata_settings


@router.get(
    "/public",
    response_model=FullPublicSettings,
    summary="Get Public Settings",
    description="Settings needed by unauthenticated clients (title, login options, 4K availability).",
)
async def get_public_settings(store: SettingsDep) -> FullPublicSettings:
    return store.full_public_settings
