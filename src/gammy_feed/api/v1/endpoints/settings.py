# src/gammy_feed/api/v1/endpoints/settings.py
"""Settings store endpoints; reads are public, writes are admin only."""

from typing import Any

from fastapi import APIRouter

from gammy_feed.api.v1.dependencies import AdminUserDep, SettingsStoreDep, translate_errors
from gammy_feed.schemas.setting import BulkSettingsResponse, SettingResponse, SettingUpdate

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/")
async def get_all_settings(store: SettingsStoreDep) -> dict[str, Any]:
    with translate_errors("Failed to get settings"):
        return {key: value.to_python() for key, value in store.get_all().items()}


@router.get("/{key}")
async def get_setting(key: str, store: SettingsStoreDep) -> Any:
    """Return the decoded value, or null when the key is unset."""
    with translate_errors("Failed to get setting"):
        stored = store.get(key)
    return stored.to_python() if stored is not None else None


@router.put("/{key}", response_model=SettingResponse)
async def save_setting(
    key: str,
    payload: SettingUpdate,
    store: SettingsStoreDep,
    _admin: AdminUserDep,
) -> SettingResponse:
    with translate_errors("Failed to save setting"):
        saved = store.set(key, payload.value)
    return SettingResponse(key=key, value=saved.to_python())


@router.post("/bulk", response_model=BulkSettingsResponse)
async def save_settings(
    payload: dict[str, Any],
    store: SettingsStoreDep,
    _admin: AdminUserDep,
) -> BulkSettingsResponse:
    """Save several settings in one transaction."""
    with translate_errors("Failed to save settings"):
        saved = store.set_many(payload)
    return BulkSettingsResponse(
        message="Settings saved",
        settings={key: value.to_python() for key, value in saved.items()},
    )
