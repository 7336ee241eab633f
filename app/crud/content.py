from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import apply_search, apply_sort
from app.models.content import Content

SORTABLE_COLUMNS = ("created_at", "updated_at", "title", "type", "file_size")


async def list_materials(
    session: AsyncSession,
    content_type: str | None = None,
    search: str | None = None,
    sort: str = "created_at",
    order: str = "desc",
) -> Sequence[Content]:
    """학습 자료 목록 (유형 필터, 제목 검색, 정렬)"""
    stmt = select(Content)
    if content_type:
        stmt = stmt.where(Content.type == content_type)
    stmt = apply_search(stmt, [Content.title, Content.title_hi], search)
    stmt = apply_sort(stmt, Content, sort, order, SORTABLE_COLUMNS)
    result = await session.execute(stmt)
    return result.scalars().all()
