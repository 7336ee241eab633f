import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel

ReportStatus = Literal["pending", "investigating", "resolved", "ignored"]


class ReportResponse(BaseModel):
    """신고 응답 스키마"""
    id: uuid.UUID
    user_id: uuid.UUID
    type: str
    target_id: str | None
    message: str
    status: str
    admin_note: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class ReportListResponse(BaseModel):
    reports: list[ReportResponse]
    total: int


class ReportStatusUpdateRequest(BaseModel):
    """처리 상태 및 관리자 메모 변경"""
    status: ReportStatus
    admin_note: str | None = None
