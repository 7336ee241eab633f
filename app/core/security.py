"""관리자 API 접근 제어

로그인/세션은 외부 인증 서비스가 담당하고, 이 API는 그 서비스가 발급한
Bearer 액세스 토큰만 검증한다.
"""
import logging
import uuid

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.crud import user as user_crud
from app.exceptions import AdminRequiredError, AuthenticationError
from app.models.base import get_db
from app.models.user import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> uuid.UUID:
    """토큰 서명/만료를 검증하고 sub(사용자 ID)를 반환"""
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"verify_aud": False},
        )
    except jwt.PyJWTError as e:
        logger.warning(f"토큰 검증 실패: {e}")
        raise AuthenticationError("유효하지 않은 토큰입니다") from e

    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError("토큰에 사용자 정보가 없습니다")
    try:
        return uuid.UUID(str(subject))
    except ValueError as e:
        raise AuthenticationError("유효하지 않은 토큰입니다") from e


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """관리자(plan == admin)만 통과시키는 의존성"""
    if credentials is None:
        raise AuthenticationError()

    user_id = decode_access_token(credentials.credentials)
    user = await user_crud.get_user_by_id(db, user_id)
    if not user:
        raise AuthenticationError("사용자를 찾을 수 없습니다")
    if not user.is_admin:
        logger.warning(f"관리자 권한 없음: user_id={user_id}, plan={user.plan}")
        raise AdminRequiredError()
    return user
