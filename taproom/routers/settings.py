from fastapi import APIRouter, Depends

from taproom.deps import get_settings_store, require_admin
from taproom.errors import AppError
from taproom.models import User
from taproom.schemas import ErrorCode, SettingIn, SettingOut
from taproom.services.settings_store import SqlSettingsStore
from taproom.services.timezone_config import TIMEZONE_SETTING_KEY, is_valid_timezone

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=list[SettingOut])
async def list_settings(store: SqlSettingsStore = Depends(get_settings_store)) -> list[SettingOut]:
    return [SettingOut.model_validate(s) for s in await store.list_all()]


@router.get("/{key}", response_model=SettingOut)
async def get_setting(key: str, store: SqlSettingsStore = Depends(get_settings_store)) -> SettingOut:
    setting = await store.fetch(key)
    if not setting:
        raise AppError(
            ErrorCode.setting_not_found,
            "Setting not found.",
            f"No setting with key {key}",
            404,
        )
    return SettingOut.model_validate(setting)


@router.put("/{key}", response_model=SettingOut)
async def upsert_setting(
    key: str,
    payload: SettingIn,
    store: SqlSettingsStore = Depends(get_settings_store),
    current_user: User = Depends(require_admin),
) -> SettingOut:
    value = payload.value.strip()
    if key == TIMEZONE_SETTING_KEY and not is_valid_timezone(value):
        raise AppError(
            ErrorCode.invalid_timezone,
            "Please choose a valid timezone such as America/Denver.",
            f"Unknown IANA timezone: {payload.value!r}",
            422,
        )
    setting = await store.upsert(key, value, payload.description, user_id=current_user.id)
    return SettingOut.model_validate(setting)
