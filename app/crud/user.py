import uuid
from datetime import datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.crud.base import apply_search, count_rows, paginate
from app.models.performance import UserPerformanceSummary, UserSubjectPerformance
from app.models.test_attempt import TestAttempt
from app.models.user import ADMIN_PLAN, User


async def get_user_by_id(session: AsyncSession, user_id: uuid.UUID) -> User | None:
    """ID로 사용자 조회"""
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    """이메일로 사용자 조회"""
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def list_users(
    session: AsyncSession,
    page: int,
    page_size: int,
    plan: str | None = None,
    search: str | None = None,
) -> tuple[Sequence[User], int]:
    """사용자 목록 조회 (요금제 필터, 이름/전화/이메일 검색, 최신 가입순)"""
    stmt = select(User)
    if plan:
        stmt = stmt.where(User.plan == plan)
    stmt = apply_search(stmt, [User.name, User.phone, User.email], search)

    total = await count_rows(session, stmt)
    stmt = paginate(stmt.order_by(User.created_at.desc()), page, page_size)
    result = await session.execute(stmt)
    return result.scalars().all(), total


async def get_all_users(session: AsyncSession) -> Sequence[User]:
    """전체 사용자 (CSV 내보내기용)"""
    result = await session.execute(select(User).order_by(User.created_at.desc()))
    return result.scalars().all()


async def get_admins(session: AsyncSession) -> Sequence[User]:
    """관리자 목록"""
    result = await session.execute(select(User).where(User.plan == ADMIN_PLAN).order_by(User.created_at))
    return result.scalars().all()


async def set_user_plan(session: AsyncSession, user: User, plan: str) -> User:
    """요금제(권한) 변경"""
    user.plan = plan
    await session.commit()
    await session.refresh(user)
    return user


async def count_users(session: AsyncSession) -> int:
    return await count_rows(session, select(User.id))


async def count_active_users(session: AsyncSession, since: datetime) -> int:
    """since 이후 활동한 사용자 수"""
    return await count_rows(session, select(User.id).where(User.last_active_date >= since))


async def get_performance_summary(session: AsyncSession, user_id: uuid.UUID) -> UserPerformanceSummary | None:
    """성적 요약 (응시 이력이 없으면 None)"""
    result = await session.execute(
        select(UserPerformanceSummary).where(UserPerformanceSummary.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def get_subject_performance(session: AsyncSession, user_id: uuid.UUID) -> Sequence[UserSubjectPerformance]:
    result = await session.execute(
        select(UserSubjectPerformance)
        .where(UserSubjectPerformance.user_id == user_id)
        .order_by(UserSubjectPerformance.subject)
    )
    return result.scalars().all()


async def get_recent_attempts(
    session: AsyncSession,
    user_id: uuid.UUID,
    limit: int = 10,
) -> Sequence[TestAttempt]:
    """완료된 최근 응시 기록 (시험 제목 포함)"""
    result = await session.execute(
        select(TestAttempt)
        .options(joinedload(TestAttempt.test))
        .where(TestAttempt.user_id == user_id, TestAttempt.completed_at.is_not(None))
        .order_by(TestAttempt.completed_at.desc())
        .limit(limit)
    )
    return result.scalars().all()
