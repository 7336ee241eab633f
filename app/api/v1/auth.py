from fastapi import APIRouter, Depends

from app.core.security import get_current_admin
from app.models.user import User
from app.schemas.user import UserResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=UserResponse)
async def get_me(admin: User = Depends(get_current_admin)):
    """현재 로그인한 관리자 정보 API"""
    return UserResponse.model_validate(admin)
