import uuid
from datetime import datetime

from pydantic import BaseModel


class BannerResponse(BaseModel):
    """배너 응답 스키마"""
    id: uuid.UUID
    title: str
    image_url: str
    target_type: str
    target_value: str | None
    display_order: int
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class BannerListResponse(BaseModel):
    banners: list[BannerResponse]
    total: int
