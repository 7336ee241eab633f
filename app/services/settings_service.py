import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import setting as setting_crud, user as user_crud
from app.exceptions import InvalidRequestError, RecordNotFoundError
from app.models.user import ADMIN_PLAN, User
from app.schemas.setting import SettingsPayload

logger = logging.getLogger(__name__)

SECTIONS = tuple(SettingsPayload.model_fields)


async def get_settings(session: AsyncSession) -> SettingsPayload:
    """저장된 섹션 값을 기본값 위에 덮어써서 반환"""
    defaults = SettingsPayload().model_dump()
    for row in await setting_crud.get_all_settings(session):
        if row.key in defaults and isinstance(row.value, dict):
            defaults[row.key] = {**defaults[row.key], **row.value}
    return SettingsPayload.model_validate(defaults)


async def save_settings(session: AsyncSession, payload: SettingsPayload) -> SettingsPayload:
    """섹션마다 한 행씩 upsert"""
    data = payload.model_dump()
    try:
        for key in SECTIONS:
            await setting_crud.upsert_setting(session, key, data[key])
        await session.commit()
    except Exception as e:
        logger.error(f"설정 저장 실패: {e}", exc_info=True)
        await session.rollback()
        raise
    logger.info(f"설정 저장: sections={list(SECTIONS)}")
    return payload


async def grant_admin(session: AsyncSession, email: str) -> User:
    user = await user_crud.get_user_by_email(session, email.strip())
    if not user:
        raise RecordNotFoundError("User", email)
    user = await user_crud.set_user_plan(session, user, ADMIN_PLAN)
    logger.info(f"관리자 권한 부여: user_id={user.id}")
    return user


async def revoke_admin(session: AsyncSession, user_id: uuid.UUID, current_admin: User) -> User:
    """관리자 권한 회수 (plan → free). 자기 자신은 회수할 수 없음"""
    if user_id == current_admin.id:
        raise InvalidRequestError("자신의 관리자 권한은 회수할 수 없습니다")
    user = await user_crud.get_user_by_id(session, user_id)
    if not user:
        raise RecordNotFoundError("User", user_id)
    user = await user_crud.set_user_plan(session, user, "free")
    logger.info(f"관리자 권한 회수: user_id={user.id}")
    return user
