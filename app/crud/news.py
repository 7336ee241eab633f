from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import apply_search, count_rows, paginate
from app.models.news import NewsItem


async def list_news(
    session: AsyncSession,
    page: int,
    page_size: int,
    search: str | None = None,
) -> tuple[Sequence[NewsItem], int]:
    """뉴스 목록 (제목 검색, 발행일 최신순)"""
    stmt = apply_search(select(NewsItem), [NewsItem.title], search)
    total = await count_rows(session, stmt)
    stmt = paginate(stmt.order_by(NewsItem.pub_date.desc()), page, page_size)
    result = await session.execute(stmt)
    return result.scalars().all(), total
