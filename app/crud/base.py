"""테이블 공통 쿼리 헬퍼 (검색, 정렬, 페이지네이션, 카운트)"""
import math
import uuid
from typing import Any, Sequence, TypeVar

from sqlalchemy import Select, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from app.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)


def apply_search(
    stmt: Select,
    columns: Sequence[InstrumentedAttribute],
    query: str | None,
) -> Select:
    """여러 컬럼에 대한 부분 일치(ilike) OR 검색"""
    if not query:
        return stmt
    pattern = f"%{query}%"
    return stmt.where(or_(*[column.ilike(pattern) for column in columns]))


def apply_sort(
    stmt: Select,
    model: type[Base],
    sort: str,
    order: str,
    allowed: Sequence[str],
    default: str = "created_at",
) -> Select:
    """허용된 컬럼으로만 정렬 (그 외 값은 기본 컬럼 사용)"""
    column = getattr(model, sort if sort in allowed else default)
    return stmt.order_by(column.asc() if order == "asc" else column.desc())


def paginate(stmt: Select, page: int, page_size: int) -> Select:
    """1부터 시작하는 page 번호를 offset/limit 범위로 변환"""
    return stmt.offset((page - 1) * page_size).limit(page_size)


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if page_size else 0


async def count_rows(session: AsyncSession, stmt: Select) -> int:
    """필터가 적용된 select 문의 전체 행 수 (정렬/범위 제외)"""
    count_stmt = select(func.count()).select_from(
        stmt.order_by(None).limit(None).offset(None).subquery()
    )
    total = await session.scalar(count_stmt)
    return total or 0


async def get_by_id(session: AsyncSession, model: type[ModelT], record_id: uuid.UUID) -> ModelT | None:
    """ID로 단건 조회"""
    return await session.get(model, record_id)


async def create_record(session: AsyncSession, model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """단건 생성 후 커밋"""
    record = model(**data)
    session.add(record)
    await session.commit()
    await session.refresh(record)
    return record


async def update_record(session: AsyncSession, record: ModelT, data: dict[str, Any]) -> ModelT:
    """전달된 필드만 갱신 후 커밋"""
    for field, value in data.items():
        setattr(record, field, value)
    await session.commit()
    await session.refresh(record)
    return record


async def delete_by_id(session: AsyncSession, model: type[Base], record_id: uuid.UUID) -> bool:
    """ID로 삭제, 삭제된 행이 없으면 False"""
    result = await session.execute(delete(model).where(model.id == record_id))
    await session.commit()
    return result.rowcount > 0


async def delete_by_ids(session: AsyncSession, model: type[Base], record_ids: Sequence[uuid.UUID]) -> int:
    """여러 건 일괄 삭제, 삭제된 행 수 반환"""
    if not record_ids:
        return 0
    result = await session.execute(delete(model).where(model.id.in_(record_ids)))
    await session.commit()
    return result.rowcount
