"""DB 브라우저: 허용된 테이블에 대한 범용 조회/삭제"""
import uuid
from typing import Any, Sequence

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import apply_search, count_rows, delete_by_id, paginate
from app.models.base import Base
from app.models.content import Content
from app.models.question import Question
from app.models.test import Test
from app.models.test_attempt import Payment, TestAttempt
from app.models.user import User

BROWSABLE_TABLES: dict[str, type[Base]] = {
    "users": User,
    "tests": Test,
    "questions": Question,
    "content": Content,
    "test_attempts": TestAttempt,
    "payments": Payment,
}

# 테이블별 검색 대상 컬럼
SEARCH_COLUMNS: dict[str, tuple[str, ...]] = {
    "users": ("name", "email"),
    "tests": ("title", "description"),
    "questions": ("question_text", "question_text_hi"),
    "content": ("title", "title_hi"),
}


def row_to_dict(record: Base) -> dict[str, Any]:
    """모델 인스턴스를 DB 컬럼명 기준 dict로 변환"""
    mapper = inspect(record).mapper
    return {
        column.name: getattr(record, attr.key)
        for attr in mapper.column_attrs
        for column in attr.columns
    }


def get_column_names(model: type[Base]) -> list[str]:
    return [column.name for column in model.__table__.columns]


async def list_rows(
    session: AsyncSession,
    model: type[Base],
    page: int,
    page_size: int,
) -> tuple[Sequence[Base], int]:
    """최신순 페이지 조회 + 전체 개수"""
    stmt = select(model)
    total = await count_rows(session, stmt)
    stmt = paginate(stmt.order_by(model.created_at.desc()), page, page_size)
    result = await session.execute(stmt)
    return result.scalars().all(), total


async def search_rows(session: AsyncSession, table: str, query: str) -> Sequence[Base]:
    """테이블별 텍스트 컬럼 검색 (검색 컬럼이 없는 테이블은 전체 반환)"""
    model = BROWSABLE_TABLES[table]
    columns = [getattr(model, name) for name in SEARCH_COLUMNS.get(table, ())]
    stmt = select(model)
    if columns:
        stmt = apply_search(stmt, columns, query)
    result = await session.execute(stmt.order_by(model.created_at.desc()))
    return result.scalars().all()


async def get_all_rows(session: AsyncSession, model: type[Base]) -> Sequence[Base]:
    result = await session.execute(select(model).order_by(model.created_at.desc()))
    return result.scalars().all()


async def delete_row(session: AsyncSession, model: type[Base], record_id: uuid.UUID) -> bool:
    return await delete_by_id(session, model, record_id)
