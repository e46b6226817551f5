"""Settings store request/response schemas."""

from typing import Any

from pydantic import BaseModel


class SettingUpdate(BaseModel):
    """Body of ``PUT /settings/{key}``; ``value`` may be any JSON value."""

    value: Any


class SettingResponse(BaseModel):
    key: str
    value: Any


class BulkSettingsResponse(BaseModel):
    message: str
    settings: dict[str, Any]
