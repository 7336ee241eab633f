import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class NotificationCreateRequest(BaseModel):
    """알림 발송 요청 스키마"""
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    type: Literal["info", "alert", "promo"] = "info"
    target_audience: str = Field("all", description="대상 (all, free, pro 등)")


class NotificationResponse(BaseModel):
    id: uuid.UUID
    title: str
    message: str
    type: str
    target_audience: str
    created_at: datetime

    model_config = {"from_attributes": True}


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]
    total: int
