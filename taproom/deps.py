from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from taproom.config import get_settings
from taproom.db import get_db_session
from taproom.errors import AppError
from taproom.models import User, UserRole
from taproom.schemas import ErrorCode
from taproom.services.date_codecs import CivilDateCodec, CivilDateTimeCodec
from taproom.services.settings_store import SqlSettingsStore
from taproom.services.status_classifier import LifecycleStatusClassifier
from taproom.services.timezone_config import TimezoneConfig


async def get_current_user(
    session: AsyncSession = Depends(get_db_session),
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> User:
    if not x_user_id:
        raise AppError(
            ErrorCode.validation_error,
            "Authentication is required for this operation.",
            "Missing X-User-Id header.",
            401,
        )
    try:
        user_id = UUID(x_user_id)
    except ValueError as exc:  # noqa: B904
        raise AppError(
            ErrorCode.validation_error,
            "Invalid authentication token.",
            f"Invalid X-User-Id header: {x_user_id}",
            401,
        ) from exc

    user = await session.get(User, user_id)
    if not user:
        raise AppError(
            ErrorCode.user_not_found,
            "User for this session no longer exists.",
            f"User {user_id} not found for current user.",
            401,
        )
    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != UserRole.admin:
        raise AppError(
            ErrorCode.validation_error,
            "You do not have permission to perform this action.",
            f"User {current_user.id} is not an admin.",
            403,
        )
    return current_user


def get_settings_store(session: AsyncSession = Depends(get_db_session)) -> SqlSettingsStore:
    return SqlSettingsStore(session)


async def get_company_timezone(store: SqlSettingsStore = Depends(get_settings_store)) -> str:
    return await TimezoneConfig(store).resolve()


def get_date_codec() -> CivilDateCodec:
    return CivilDateCodec(step_minutes=get_settings().solver_offset_step_minutes)


def get_datetime_codec() -> CivilDateTimeCodec:
    return CivilDateTimeCodec(step_minutes=get_settings().solver_offset_step_minutes)


def get_classifier(codec: CivilDateCodec = Depends(get_date_codec)) -> LifecycleStatusClassifier:
    return LifecycleStatusClassifier(codec)
