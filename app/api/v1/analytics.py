from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_admin
from app.models.base import get_db
from app.models.user import User
from app.schemas import analytics as analytics_schema
from app.services import analytics_service

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/dashboard", response_model=analytics_schema.DashboardStatsResponse)
async def get_dashboard_stats(admin: User = Depends(get_current_admin)):
    """대시보드 카운터 API"""
    return await analytics_service.get_dashboard_stats()


@router.get("", response_model=analytics_schema.AnalyticsResponse)
async def get_analytics(
    time_range: analytics_schema.TimeRange = "30days",
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """기간별 통계 API"""
    return await analytics_service.get_analytics_overview(db, time_range)
