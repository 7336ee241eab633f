import uuid
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import apply_search, count_rows
from app.models.test import Test


async def get_test_by_id(session: AsyncSession, test_id: uuid.UUID) -> Test | None:
    """ID로 시험 조회"""
    result = await session.execute(select(Test).where(Test.id == test_id))
    return result.scalar_one_or_none()


async def list_tests(
    session: AsyncSession,
    test_type: str | None = None,
    search: str | None = None,
) -> Sequence[Test]:
    """시험 목록 조회 (유형 필터, 영문/힌디 제목 검색, 최신순)"""
    stmt = select(Test)
    if test_type:
        stmt = stmt.where(Test.test_type == test_type)
    stmt = apply_search(stmt, [Test.title, Test.title_hi], search)
    result = await session.execute(stmt.order_by(Test.created_at.desc()))
    return result.scalars().all()


async def create_test(session: AsyncSession, data: dict[str, Any]) -> Test:
    """시험 생성 (문제 수와 응시 수는 0에서 시작)"""
    test = Test(**data, total_questions=0, total_attempts=0)
    session.add(test)
    await session.commit()
    await session.refresh(test)
    return test


async def count_tests(session: AsyncSession) -> int:
    return await count_rows(session, select(Test.id))
