from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.banner import Banner


async def list_banners(session: AsyncSession) -> Sequence[Banner]:
    """배너 목록 (노출 순서대로)"""
    result = await session.execute(select(Banner).order_by(Banner.display_order.asc(), Banner.created_at))
    return result.scalars().all()


async def toggle_banner(session: AsyncSession, banner: Banner) -> Banner:
    """활성 상태 반전"""
    banner.is_active = not banner.is_active
    await session.commit()
    await session.refresh(banner)
    return banner
