"""User settings routes."""

import logging

from fastapi import APIRouter, Body, Request

from ...models.user_settings import DEFAULT_USER_ID
from ...services.settings import SettingsError, SettingsService
from . import error_response, get_db_path

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
async def get_settings(request: Request):
    """Get settings, creating the defaults on first call."""
    service = SettingsService(get_db_path(request))
    try:
        settings = await service.get_user_settings(DEFAULT_USER_ID)
    except SettingsError as e:
        logger.exception("Error fetching settings")
        return error_response(500, "Internal server error", str(e))
    return settings.to_dict()


@router.put("")
async def update_settings(request: Request, updates: dict = Body(default={})):
    """Merge a partial settings payload."""
    service = SettingsService(get_db_path(request))
    try:
        settings = await service.update_user_settings(DEFAULT_USER_ID, updates)
    except SettingsError as e:
        logger.exception("Error updating settings")
        return error_response(500, "Internal server error", str(e))
    return settings.to_dict()


@router.post("/reset")
async def reset_settings(request: Request):
    """Reset metric settings and goal weight to the defaults."""
    service = SettingsService(get_db_path(request))
    try:
        settings = await service.reset_user_settings(DEFAULT_USER_ID)
    except SettingsError as e:
        logger.exception("Error resetting settings")
        return error_response(500, "Internal server error", str(e))
    return settings.to_dict()
