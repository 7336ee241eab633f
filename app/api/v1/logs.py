from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_admin
from app.crud import audit_log as audit_log_crud, base as base_crud
from app.models.base import get_db
from app.models.user import User
from app.schemas import audit_log as audit_log_schema

router = APIRouter(prefix="/logs", tags=["logs"])

LOGS_PAGE_SIZE = 50


@router.get("", response_model=audit_log_schema.AuditLogListResponse)
async def list_logs(
    page: int = Query(1, ge=1),
    search: str | None = None,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """감사 로그 목록 API"""
    logs, total = await audit_log_crud.list_audit_logs(db, page, LOGS_PAGE_SIZE, search=search)
    return audit_log_schema.AuditLogListResponse(
        logs=[audit_log_schema.AuditLogResponse.model_validate(log) for log in logs],
        total=total,
        page=page,
        page_size=LOGS_PAGE_SIZE,
        total_pages=base_crud.total_pages(total, LOGS_PAGE_SIZE),
    )
