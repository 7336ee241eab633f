"""대시보드/통계 서비스 테스트"""
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio

from app.crud import analytics as analytics_crud, question as question_crud, test as test_crud, user as user_crud
from app.models import Content, User
from app.models.test_attempt import Payment, TestAttempt
from app.services import analytics_service

NOW = datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)


class FakeSessionMaker:
    """get_async_session_maker()() 대체용 (세션 대신 문자열을 넘김)"""

    def __call__(self):
        return self

    async def __aenter__(self):
        return "session"

    async def __aexit__(self, *args):
        return False


@pytest.mark.asyncio
async def test_dashboard_stats_runs_each_count():
    with patch.object(analytics_service, "get_async_session_maker", return_value=FakeSessionMaker()), \
            patch.object(user_crud, "count_users", new_callable=AsyncMock, return_value=120), \
            patch.object(test_crud, "count_tests", new_callable=AsyncMock, return_value=8), \
            patch.object(question_crud, "count_questions", new_callable=AsyncMock, return_value=950), \
            patch.object(user_crud, "count_active_users", new_callable=AsyncMock, return_value=42) as count_active:
        stats = await analytics_service.get_dashboard_stats(now=NOW)

    assert stats.total_users == 120
    assert stats.total_tests == 8
    assert stats.total_questions == 950
    assert stats.active_users == 42
    count_active.assert_awaited_once_with("session", datetime(2026, 10, 10, 9, 0, tzinfo=timezone.utc))


@pytest.mark.parametrize(
    "time_range,days,months",
    [("7days", 7, 6), ("30days", 30, 6), ("90days", 90, 6), ("1year", 365, 12)],
)
def test_range_helpers(time_range, days, months):
    assert (NOW - analytics_service.range_start(time_range, NOW)).days == days
    assert analytics_service.revenue_months(time_range) == months


@pytest_asyncio.fixture
async def analytics_data(test_db_session, sample_test):
    users = [
        User(email="a@example.com", plan="free"),
        User(email="b@example.com", plan="free"),
        User(email="c@example.com", plan="pro"),
    ]
    test_db_session.add_all(users)
    test_db_session.add_all(
        [
            Content(title="Polity Notes", type="pdf", is_free=True),
            Content(title="Algebra Formulas", type="formula"),
            Content(title="October Current Affairs", type="current_affairs", is_free=True),
        ]
    )
    await test_db_session.flush()
    test_db_session.add_all(
        [
            TestAttempt(user_id=users[0].id, test_id=sample_test.id, score=120, status="completed"),
            TestAttempt(user_id=users[1].id, test_id=sample_test.id, score=140, status="completed"),
            TestAttempt(user_id=users[2].id, test_id=sample_test.id, status="in_progress"),
            Payment(user_id=users[2].id, amount=499),
        ]
    )
    await test_db_session.commit()
    return users


@pytest.mark.asyncio
async def test_analytics_overview_without_procedures(test_db_session, analytics_data):
    """SQLite에는 저장 프로시저가 없으므로 차트 데이터만 빈 목록"""
    overview = await analytics_service.get_analytics_overview(test_db_session, "30days")

    assert overview.user_metrics.total_users == 3
    assert overview.user_metrics.free_users == 2
    assert overview.user_metrics.pro_users == 1
    assert overview.user_metrics.user_growth == []

    assert overview.content_metrics.total_content == 3
    assert overview.content_metrics.pdfs == 1
    assert overview.content_metrics.free_content == 2
    assert overview.content_metrics.premium_content == 1

    assert overview.test_metrics.total_tests == 1
    assert overview.test_metrics.total_attempts == 3
    assert overview.test_metrics.avg_score == 86.67
    assert overview.test_metrics.completion_rate == 66.67
    assert overview.test_metrics.popular_tests == []

    assert overview.revenue_metrics.total_revenue == 499
    assert overview.revenue_metrics.revenue_by_plan == [
        {"name": "Free", "value": 0},
        {"name": "Pro", "value": 499},
    ]


@pytest.mark.asyncio
async def test_analytics_overview_with_procedures(test_db_session):
    growth = [{"date": date(2026, 10, 16), "count": 3}]
    popular = [{"id": "t1", "title": "SSC CGL Mock 1", "attempts": 10}]
    revenue = [{"month": "2026-10", "revenue": 4990}]

    with patch.object(analytics_crud, "get_daily_registrations", new_callable=AsyncMock, return_value=growth) as daily, \
            patch.object(analytics_crud, "get_popular_tests", new_callable=AsyncMock, return_value=popular), \
            patch.object(analytics_crud, "get_monthly_revenue", new_callable=AsyncMock, return_value=revenue) as monthly:
        overview = await analytics_service.get_analytics_overview(test_db_session, "1year", now=NOW)

    daily.assert_awaited_once_with(test_db_session, 365)
    monthly.assert_awaited_once_with(test_db_session, 12)
    assert overview.user_metrics.user_growth == [{"date": "2026-10-16", "users": 3}]
    assert overview.test_metrics.popular_tests == popular
    assert overview.test_metrics.completion_rate == 0.0
    assert overview.revenue_metrics.revenue_growth == revenue


@pytest.mark.asyncio
async def test_unknown_procedure_is_rejected(test_db_session):
    with pytest.raises(ValueError):
        await analytics_crud.call_procedure(test_db_session, "drop_everything", days=1)


@pytest.mark.asyncio
async def test_analytics_api_rejects_unknown_range(client):
    response = await client.get("/api/v1/analytics", params={"time_range": "2days"})
    assert response.status_code == 422
