import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_admin
from app.crud import base as base_crud, report as report_crud
from app.exceptions import RecordNotFoundError
from app.models.base import get_db
from app.models.report import Report
from app.models.user import User
from app.schemas import report as report_schema
from app.services import audit_service

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("", response_model=report_schema.ReportListResponse)
async def list_reports(
    status: str = "pending",
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """신고 목록 API (status=all이면 전체)"""
    reports = await report_crud.list_reports(db, status=None if status == "all" else status)
    return report_schema.ReportListResponse(
        reports=[report_schema.ReportResponse.model_validate(r) for r in reports],
        total=len(reports),
    )


@router.patch("/{report_id}", response_model=report_schema.ReportResponse)
async def update_report(
    report_id: uuid.UUID,
    request: report_schema.ReportStatusUpdateRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """신고 처리 상태 변경 API"""
    report = await base_crud.get_by_id(db, Report, report_id)
    if not report:
        raise RecordNotFoundError("Report", report_id)
    report = await report_crud.update_report_status(db, report, request.status, request.admin_note)
    response = report_schema.ReportResponse.model_validate(report)
    await audit_service.log_action(
        db, admin, "reports.update_status", "user_reports", report_id, details=request.model_dump()
    )
    return response
