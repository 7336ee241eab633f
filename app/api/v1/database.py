import uuid

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_admin
from app.crud.database import BROWSABLE_TABLES
from app.models.base import get_db
from app.models.user import User
from app.schemas import database as database_schema
from app.services import audit_service, database_service

router = APIRouter(prefix="/database", tags=["database"])


@router.get("/tables", response_model=list[database_schema.TableInfo])
async def list_tables(admin: User = Depends(get_current_admin)):
    """조회 가능한 테이블 목록 API"""
    return [
        database_schema.TableInfo(name=name, label=name.replace("_", " ").title())
        for name in BROWSABLE_TABLES
    ]


@router.get("/{table}", response_model=database_schema.TableRowsResponse)
async def browse_table(
    table: str,
    page: int = Query(1, ge=1),
    search: str | None = None,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """테이블 행 조회/검색 API"""
    return await database_service.browse_table(db, table, page=page, search=search)


@router.get("/{table}/export")
async def export_table(
    table: str,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """테이블 CSV 다운로드 API"""
    filename, content = await database_service.export_table(db, table)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.delete("/{table}/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_row(
    table: str,
    record_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """테이블 행 삭제 API"""
    await database_service.delete_table_row(db, table, record_id)
    await audit_service.log_action(db, admin, "database.delete", table, record_id)
