from datetime import datetime, timezone
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.setting import Setting


async def get_all_settings(session: AsyncSession) -> Sequence[Setting]:
    result = await session.execute(select(Setting))
    return result.scalars().all()


async def upsert_setting(session: AsyncSession, key: str, value: dict[str, Any]) -> None:
    """섹션 단위 upsert (커밋하지 않음)"""
    # PostgreSQL ON CONFLICT 대신 merge를 써서 SQLite 테스트 DB와 동일하게 동작
    await session.merge(Setting(key=key, value=value, updated_at=datetime.now(timezone.utc)))
