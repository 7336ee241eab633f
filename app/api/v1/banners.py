import uuid

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_admin
from app.crud import banner as banner_crud, base as base_crud
from app.exceptions import RecordNotFoundError
from app.models.banner import Banner
from app.models.base import get_db
from app.models.user import User
from app.schemas import banner as banner_schema
from app.services import audit_service, content_service

router = APIRouter(prefix="/banners", tags=["banners"])


@router.get("", response_model=banner_schema.BannerListResponse)
async def list_banners(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """배너 목록 API"""
    banners = await banner_crud.list_banners(db)
    return banner_schema.BannerListResponse(
        banners=[banner_schema.BannerResponse.model_validate(b) for b in banners],
        total=len(banners),
    )


@router.post("", response_model=banner_schema.BannerResponse, status_code=status.HTTP_201_CREATED)
async def create_banner(
    image: UploadFile = File(...),
    title: str = Form(...),
    target_type: str = Form("none"),
    target_value: str | None = Form(None),
    display_order: int = Form(0),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """배너 생성 API (이미지 업로드)"""
    banner = await content_service.create_banner(
        db,
        image,
        title=title,
        target_type=target_type,
        target_value=target_value,
        display_order=display_order,
    )
    response = banner_schema.BannerResponse.model_validate(banner)
    await audit_service.log_action(db, admin, "banners.create", "app_banners", banner.id, details={"title": title})
    return response


@router.post("/{banner_id}/toggle", response_model=banner_schema.BannerResponse)
async def toggle_banner(
    banner_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """배너 활성/비활성 전환 API"""
    banner = await base_crud.get_by_id(db, Banner, banner_id)
    if not banner:
        raise RecordNotFoundError("Banner", banner_id)
    banner = await banner_crud.toggle_banner(db, banner)
    response = banner_schema.BannerResponse.model_validate(banner)
    await audit_service.log_action(
        db, admin, "banners.toggle", "app_banners", banner_id, details={"is_active": banner.is_active}
    )
    return response


@router.delete("/{banner_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_banner(
    banner_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """배너 삭제 API"""
    if not await base_crud.delete_by_id(db, Banner, banner_id):
        raise RecordNotFoundError("Banner", banner_id)
    await audit_service.log_action(db, admin, "banners.delete", "app_banners", banner_id)
