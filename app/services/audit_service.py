import logging
import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import audit_log as audit_log_crud
from app.models.user import User

logger = logging.getLogger(__name__)


async def log_action(
    session: AsyncSession,
    admin: User,
    action: str,
    table_name: str | None = None,
    record_id: uuid.UUID | str | None = None,
    details: dict[str, Any] | None = None,
) -> None:
    """관리자 작업 감사 로그 (실패해도 작업 자체는 실패시키지 않음)"""
    try:
        await audit_log_crud.create_audit_log(
            session,
            action=action,
            user_id=admin.id,
            table_name=table_name,
            record_id=str(record_id) if record_id is not None else None,
            details=details,
        )
    except Exception as e:
        logger.error(f"감사 로그 기록 실패: action={action}, table={table_name}, error={e}")
        await session.rollback()
