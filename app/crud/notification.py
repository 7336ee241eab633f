from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.notification import Notification


async def get_recent_notifications(session: AsyncSession, limit: int = 20) -> Sequence[Notification]:
    """최근 발송 이력"""
    result = await session.execute(
        select(Notification).order_by(Notification.created_at.desc()).limit(limit)
    )
    return result.scalars().all()
