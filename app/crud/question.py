import uuid
from typing import Any, Sequence

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import apply_search, count_rows, paginate
from app.models.question import Question


async def get_question_by_id(session: AsyncSession, question_id: uuid.UUID) -> Question | None:
    """ID로 문제 조회"""
    result = await session.execute(select(Question).where(Question.id == question_id))
    return result.scalar_one_or_none()


async def list_questions(
    session: AsyncSession,
    page: int,
    page_size: int,
    subject: str | None = None,
    difficulty: str | None = None,
    search: str | None = None,
) -> tuple[Sequence[Question], int]:
    """문제 목록 조회 (과목/난이도 필터, 문제 본문 검색, 최신순)"""
    stmt = select(Question)
    if subject:
        stmt = stmt.where(Question.subject == subject)
    if difficulty:
        stmt = stmt.where(Question.difficulty == difficulty)
    stmt = apply_search(stmt, [Question.question_text], search)

    total = await count_rows(session, stmt)
    stmt = paginate(stmt.order_by(Question.created_at.desc()), page, page_size)
    result = await session.execute(stmt)
    return result.scalars().all(), total


async def list_available_questions(
    session: AsyncSession,
    exclude_ids: list[uuid.UUID],
    subject: str | None = None,
    search: str | None = None,
    limit: int = 50,
) -> Sequence[Question]:
    """시험에 아직 연결되지 않은 문제 후보 조회"""
    stmt = select(Question)
    if exclude_ids:
        stmt = stmt.where(~Question.id.in_(exclude_ids))
    if subject:
        stmt = stmt.where(Question.subject == subject)
    stmt = apply_search(stmt, [Question.question_text, Question.question_text_hi], search)
    result = await session.execute(stmt.order_by(Question.created_at.desc()).limit(limit))
    return result.scalars().all()


async def add_question(session: AsyncSession, data: dict[str, Any]) -> Question:
    """문제 1건 추가 후 flush (커밋하지 않음, id 확보용)"""
    question = Question(**data)
    session.add(question)
    await session.flush()
    return question


async def insert_questions_batch(session: AsyncSession, rows: list[dict[str, Any]]) -> list[uuid.UUID]:
    """문제 배치 입력 후 생성된 id를 입력 순서대로 반환 (커밋하지 않음)"""
    if not rows:
        return []
    result = await session.execute(
        insert(Question).returning(Question.id, sort_by_parameter_order=True),
        rows,
    )
    return list(result.scalars().all())


async def count_questions(session: AsyncSession) -> int:
    return await count_rows(session, select(Question.id))
