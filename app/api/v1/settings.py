import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_admin
from app.crud import user as user_crud
from app.models.base import get_db
from app.models.user import User
from app.schemas import setting as setting_schema
from app.schemas.user import UserResponse
from app.services import audit_service, settings_service

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=setting_schema.SettingsPayload)
async def get_settings(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """설정 조회 API (저장값 + 기본값)"""
    return await settings_service.get_settings(db)


@router.put("", response_model=setting_schema.SettingsPayload)
async def save_settings(
    payload: setting_schema.SettingsPayload,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """설정 저장 API"""
    saved = await settings_service.save_settings(db, payload)
    await audit_service.log_action(
        db, admin, "settings.save", "settings", details={"sections": list(settings_service.SECTIONS)}
    )
    return saved


@router.get("/admins", response_model=list[UserResponse])
async def list_admins(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """관리자 목록 API"""
    admins = await user_crud.get_admins(db)
    return [UserResponse.model_validate(a) for a in admins]


@router.post("/admins", response_model=UserResponse)
async def grant_admin(
    request: setting_schema.GrantAdminRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """이메일로 관리자 권한 부여 API"""
    user = await settings_service.grant_admin(db, request.email)
    response = UserResponse.model_validate(user)
    await audit_service.log_action(db, admin, "settings.grant_admin", "users", user.id, details={"email": request.email})
    return response


@router.delete("/admins/{user_id}", response_model=UserResponse)
async def revoke_admin(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """관리자 권한 회수 API"""
    user = await settings_service.revoke_admin(db, user_id, admin)
    response = UserResponse.model_validate(user)
    await audit_service.log_action(db, admin, "settings.revoke_admin", "users", user_id)
    return response
