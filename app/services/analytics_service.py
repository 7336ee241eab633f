"""대시보드 카운터와 기간별 통계"""
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import analytics as analytics_crud, question as question_crud, test as test_crud, user as user_crud
from app.models.base import get_async_session_maker
from app.schemas import analytics as analytics_schema

logger = logging.getLogger(__name__)

ACTIVE_USER_WINDOW = timedelta(days=7)

RANGE_DAYS = {
    "7days": 7,
    "30days": 30,
    "90days": 90,
    "1year": 365,
}


async def _with_own_session(query: Callable[..., Awaitable[int]], *args: Any) -> int:
    """동시 실행을 위해 쿼리마다 별도 세션 사용"""
    async with get_async_session_maker()() as session:
        return await query(session, *args)


async def get_dashboard_stats(now: datetime | None = None) -> analytics_schema.DashboardStatsResponse:
    """사용자/시험/문제/최근 7일 활성 사용자 수를 동시에 조회"""
    now = now or datetime.now(timezone.utc)
    total_users, total_tests, total_questions, active_users = await asyncio.gather(
        _with_own_session(user_crud.count_users),
        _with_own_session(test_crud.count_tests),
        _with_own_session(question_crud.count_questions),
        _with_own_session(user_crud.count_active_users, now - ACTIVE_USER_WINDOW),
    )
    return analytics_schema.DashboardStatsResponse(
        total_users=total_users,
        total_tests=total_tests,
        total_questions=total_questions,
        active_users=active_users,
    )


def range_start(time_range: str, now: datetime) -> datetime:
    return now - timedelta(days=RANGE_DAYS[time_range])


def revenue_months(time_range: str) -> int:
    return 12 if time_range == "1year" else 6


async def _procedure_rows(session: AsyncSession, call: Awaitable[list[dict[str, Any]]], name: str) -> list[dict[str, Any]]:
    """프로시저 오류는 차트 데이터만 비우고 나머지 통계는 계속 반환"""
    try:
        return await call
    except SQLAlchemyError as e:
        logger.error(f"프로시저 호출 실패: {name}, error={e}")
        await session.rollback()
        return []


async def get_analytics_overview(
    session: AsyncSession,
    time_range: str = "30days",
    now: datetime | None = None,
) -> analytics_schema.AnalyticsResponse:
    now = now or datetime.now(timezone.utc)
    start = range_start(time_range, now)
    days = RANGE_DAYS[time_range]

    # 사용자
    by_plan = await analytics_crud.count_users_by_plan(session)
    growth_rows = await _procedure_rows(
        session, analytics_crud.get_daily_registrations(session, days), "get_daily_registrations"
    )
    user_metrics = analytics_schema.UserMetrics(
        total_users=sum(by_plan.values()),
        free_users=by_plan.get("free", 0),
        pro_users=by_plan.get("pro", 0),
        user_growth=[{"date": str(row.get("date")), "users": int(row.get("count") or 0)} for row in growth_rows],
    )

    # 자료
    content = await analytics_crud.get_content_counts(session)
    by_type = content["by_type"]
    total_content = sum(by_type.values())
    content_metrics = analytics_schema.ContentMetrics(
        total_content=total_content,
        pdfs=by_type.get("pdf", 0),
        formulas=by_type.get("formula", 0),
        current_affairs=by_type.get("current_affairs", 0),
        free_content=content["free"],
        premium_content=total_content - content["free"],
    )

    # 시험
    total_tests = await test_crud.count_tests(session)
    attempts = await analytics_crud.get_attempt_stats(session, start)
    completion_rate = attempts["completed"] / attempts["total"] * 100 if attempts["total"] else 0.0
    popular_tests = await _procedure_rows(
        session, analytics_crud.get_popular_tests(session, limit_count=5), "get_popular_tests"
    )
    test_metrics = analytics_schema.TestMetrics(
        total_tests=total_tests,
        total_attempts=attempts["total"],
        avg_score=round(attempts["avg_score"], 2),
        completion_rate=round(completion_rate, 2),
        popular_tests=popular_tests,
    )

    # 매출
    total_revenue = await analytics_crud.get_revenue_since(session, start)
    revenue_growth = await _procedure_rows(
        session,
        analytics_crud.get_monthly_revenue(session, revenue_months(time_range)),
        "get_monthly_revenue",
    )
    revenue_metrics = analytics_schema.RevenueMetrics(
        total_revenue=total_revenue,
        revenue_by_plan=[{"name": "Free", "value": 0}, {"name": "Pro", "value": total_revenue}],
        revenue_growth=revenue_growth,
    )

    return analytics_schema.AnalyticsResponse(
        time_range=time_range,
        user_metrics=user_metrics,
        content_metrics=content_metrics,
        test_metrics=test_metrics,
        revenue_metrics=revenue_metrics,
    )
