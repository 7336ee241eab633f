import uuid
from datetime import datetime

from pydantic import BaseModel


class NewsResponse(BaseModel):
    id: uuid.UUID
    title: str
    link: str
    description: str | None
    pub_date: datetime | None
    source: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class NewsListResponse(BaseModel):
    news: list[NewsResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
