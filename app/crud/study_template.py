from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import apply_search, apply_sort
from app.models.study_template import StudyTemplate

SORTABLE_COLUMNS = ("created_at", "updated_at", "title")


async def list_templates(
    session: AsyncSession,
    search: str | None = None,
    sort: str = "created_at",
    order: str = "desc",
) -> Sequence[StudyTemplate]:
    """학습 템플릿 목록"""
    stmt = apply_search(select(StudyTemplate), [StudyTemplate.title], search)
    stmt = apply_sort(stmt, StudyTemplate, sort, order, SORTABLE_COLUMNS)
    result = await session.execute(stmt)
    return result.scalars().all()
