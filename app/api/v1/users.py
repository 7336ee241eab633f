import uuid

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import get_current_admin
from app.crud import base as base_crud, user as user_crud
from app.exceptions import RecordNotFoundError
from app.models.base import get_db
from app.models.user import User
from app.schemas import user as user_schema
from app.schemas.user import BulkDeleteRequest, BulkDeleteResponse
from app.services import audit_service, user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=user_schema.UserListResponse)
async def list_users(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=100),
    plan: user_schema.Plan | None = None,
    search: str | None = None,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """사용자 목록 API"""
    users, total = await user_crud.list_users(db, page, page_size, plan=plan, search=search)
    return user_schema.UserListResponse(
        users=[user_schema.UserResponse.model_validate(u) for u in users],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=base_crud.total_pages(total, page_size),
    )


@router.get("/export")
async def export_users(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """사용자 CSV 다운로드 API"""
    filename, content = await user_service.export_users(db)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_users(
    request: BulkDeleteRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """선택 사용자 일괄 삭제 API"""
    deleted = await base_crud.delete_by_ids(db, User, request.ids)
    await audit_service.log_action(
        db, admin, "users.bulk_delete", "users", details={"ids": [str(i) for i in request.ids], "deleted": deleted}
    )
    return BulkDeleteResponse(deleted=deleted)


@router.get("/{user_id}", response_model=user_schema.UserDetailResponse)
async def get_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """사용자 상세 API"""
    return await user_service.get_user_detail(db, user_id)


@router.patch("/{user_id}", response_model=user_schema.UserResponse)
async def update_user(
    user_id: uuid.UUID,
    request: user_schema.UserUpdateRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """사용자 정보/요금제 수정 API"""
    user = await user_crud.get_user_by_id(db, user_id)
    if not user:
        raise RecordNotFoundError("User", user_id)

    changes = request.model_dump(exclude_unset=True)
    user = await base_crud.update_record(db, user, changes)
    response = user_schema.UserResponse.model_validate(user)
    await audit_service.log_action(db, admin, "users.update", "users", user_id, details=changes)
    return response


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """사용자 삭제 API"""
    if not await base_crud.delete_by_id(db, User, user_id):
        raise RecordNotFoundError("User", user_id)
    await audit_service.log_action(db, admin, "users.delete", "users", user_id)
