import uuid
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import apply_search, count_rows, paginate
from app.models.audit_log import AuditLog


async def create_audit_log(
    session: AsyncSession,
    action: str,
    user_id: uuid.UUID,
    table_name: str | None = None,
    record_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> AuditLog:
    """감사 로그 기록"""
    log = AuditLog(
        action=action,
        table_name=table_name,
        record_id=record_id,
        details=details,
        user_id=user_id,
    )
    session.add(log)
    await session.commit()
    return log


async def list_audit_logs(
    session: AsyncSession,
    page: int,
    page_size: int,
    search: str | None = None,
) -> tuple[Sequence[AuditLog], int]:
    """감사 로그 목록 (action 검색, 최신순)"""
    stmt = apply_search(select(AuditLog), [AuditLog.action], search)
    total = await count_rows(session, stmt)
    stmt = paginate(stmt.order_by(AuditLog.created_at.desc()), page, page_size)
    result = await session.execute(stmt)
    return result.scalars().all(), total
