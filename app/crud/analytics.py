"""대시보드/통계용 집계 쿼리와 DB 저장 프로시저 호출"""
import logging
from datetime import datetime
from typing import Any

from sqlalchemy import case, func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.content import Content
from app.models.test_attempt import Payment, TestAttempt
from app.models.user import User

logger = logging.getLogger(__name__)

# DB에 정의된 저장 프로시저 (이름 -> 파라미터 목록)
STORED_PROCEDURES: dict[str, tuple[str, ...]] = {
    "get_daily_registrations": ("days",),
    "get_popular_tests": ("limit_count",),
    "get_monthly_revenue": ("months",),
}


async def call_procedure(session: AsyncSession, name: str, **params: Any) -> list[dict[str, Any]]:
    """저장 프로시저를 이름으로 호출하고 행을 dict 목록으로 반환"""
    expected = STORED_PROCEDURES.get(name)
    if expected is None or set(params) != set(expected):
        raise ValueError(f"알 수 없는 프로시저 호출: {name}({', '.join(params)})")

    placeholders = ", ".join(f":{param}" for param in expected)
    logger.debug(f"프로시저 호출: {name}({params})")
    result = await session.execute(text(f"SELECT * FROM {name}({placeholders})"), params)
    return [dict(row) for row in result.mappings().all()]


async def get_daily_registrations(session: AsyncSession, days: int) -> list[dict[str, Any]]:
    return await call_procedure(session, "get_daily_registrations", days=days)


async def get_popular_tests(session: AsyncSession, limit_count: int = 5) -> list[dict[str, Any]]:
    return await call_procedure(session, "get_popular_tests", limit_count=limit_count)


async def get_monthly_revenue(session: AsyncSession, months: int) -> list[dict[str, Any]]:
    return await call_procedure(session, "get_monthly_revenue", months=months)


async def count_users_by_plan(session: AsyncSession) -> dict[str, int]:
    """요금제별 사용자 수"""
    result = await session.execute(select(User.plan, func.count(User.id)).group_by(User.plan))
    return {plan: count for plan, count in result.all()}


async def get_content_counts(session: AsyncSession) -> dict[str, Any]:
    """자료 유형별 개수와 무료 자료 수"""
    result = await session.execute(select(Content.type, func.count(Content.id)).group_by(Content.type))
    by_type = {content_type: count for content_type, count in result.all()}
    free_count = await session.scalar(select(func.count(Content.id)).where(Content.is_free.is_(True)))
    return {"by_type": by_type, "free": free_count or 0}


async def get_attempt_stats(session: AsyncSession, since: datetime) -> dict[str, Any]:
    """기간 내 응시 수, 평균 점수, 완료 수"""
    result = await session.execute(
        select(
            func.count(TestAttempt.id),
            func.avg(func.coalesce(TestAttempt.score, 0)),
            func.sum(case((TestAttempt.status == "completed", 1), else_=0)),
        ).where(TestAttempt.created_at >= since)
    )
    total, avg_score, completed = result.one()
    return {
        "total": total or 0,
        "avg_score": float(avg_score or 0),
        "completed": int(completed or 0),
    }


async def get_revenue_since(session: AsyncSession, since: datetime) -> float:
    total = await session.scalar(
        select(func.coalesce(func.sum(Payment.amount), 0)).where(Payment.created_at >= since)
    )
    return float(total or 0)
