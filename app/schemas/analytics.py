from typing import Any, Literal

from pydantic import BaseModel

TimeRange = Literal["7days", "30days", "90days", "1year"]


class DashboardStatsResponse(BaseModel):
    """대시보드 카운터"""
    total_users: int
    total_tests: int
    total_questions: int
    active_users: int


class UserMetrics(BaseModel):
    total_users: int
    free_users: int
    pro_users: int
    user_growth: list[dict[str, Any]]


class ContentMetrics(BaseModel):
    total_content: int
    pdfs: int
    formulas: int
    current_affairs: int
    free_content: int
    premium_content: int


class TestMetrics(BaseModel):
    __test__ = False

    total_tests: int
    total_attempts: int
    avg_score: float
    completion_rate: float
    popular_tests: list[dict[str, Any]]


class RevenueMetrics(BaseModel):
    total_revenue: float
    revenue_by_plan: list[dict[str, Any]]
    revenue_growth: list[dict[str, Any]]


class AnalyticsResponse(BaseModel):
    time_range: TimeRange
    user_metrics: UserMetrics
    content_metrics: ContentMetrics
    test_metrics: TestMetrics
    revenue_metrics: RevenueMetrics
