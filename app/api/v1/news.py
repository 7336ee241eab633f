import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import get_current_admin
from app.crud import base as base_crud, news as news_crud
from app.exceptions import RecordNotFoundError
from app.models.base import get_db
from app.models.news import NewsItem
from app.models.user import User
from app.schemas import news as news_schema
from app.services import audit_service

router = APIRouter(prefix="/news", tags=["news"])


@router.get("", response_model=news_schema.NewsListResponse)
async def list_news(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=100),
    search: str | None = None,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """뉴스 목록 API"""
    items, total = await news_crud.list_news(db, page, page_size, search=search)
    return news_schema.NewsListResponse(
        news=[news_schema.NewsResponse.model_validate(n) for n in items],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=base_crud.total_pages(total, page_size),
    )


@router.delete("/{news_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_news(
    news_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """뉴스 삭제 API"""
    if not await base_crud.delete_by_id(db, NewsItem, news_id):
        raise RecordNotFoundError("News", news_id)
    await audit_service.log_action(db, admin, "news.delete", "news", news_id)
