from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.report import Report


async def list_reports(session: AsyncSession, status: str | None = None) -> Sequence[Report]:
    """신고 목록 (상태 필터, 최신순)"""
    stmt = select(Report)
    if status:
        stmt = stmt.where(Report.status == status)
    result = await session.execute(stmt.order_by(Report.created_at.desc()))
    return result.scalars().all()


async def update_report_status(
    session: AsyncSession,
    report: Report,
    status: str,
    admin_note: str | None,
) -> Report:
    report.status = status
    report.admin_note = admin_note
    await session.commit()
    await session.refresh(report)
    return report
