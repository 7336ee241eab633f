"""DB 브라우저 (허용된 테이블만)"""
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import base as base_crud, database as database_crud
from app.exceptions import InvalidRequestError, RecordNotFoundError
from app.models.base import Base
from app.schemas.database import TableRowsResponse
from app.utils.csv_export import export_filename, to_csv

logger = logging.getLogger(__name__)

PAGE_SIZE = 50


def get_model(table: str) -> type[Base]:
    model = database_crud.BROWSABLE_TABLES.get(table)
    if model is None:
        raise RecordNotFoundError("Table", table)
    return model


async def browse_table(
    session: AsyncSession,
    table: str,
    page: int = 1,
    search: str | None = None,
) -> TableRowsResponse:
    """페이지 조회, 검색어가 있으면 테이블별 검색 컬럼으로 조회"""
    model = get_model(table)
    query = (search or "").replace(",", "").strip()
    if query:
        records = await database_crud.search_rows(session, table, query)
        total = len(records)
        page = 1
    else:
        records, total = await database_crud.list_rows(session, model, page, PAGE_SIZE)

    return TableRowsResponse(
        table=table,
        columns=database_crud.get_column_names(model),
        rows=[database_crud.row_to_dict(record) for record in records],
        total=total,
        page=page,
        page_size=PAGE_SIZE,
        total_pages=base_crud.total_pages(total, PAGE_SIZE),
    )


async def delete_table_row(session: AsyncSession, table: str, record_id: uuid.UUID) -> None:
    model = get_model(table)
    if not await database_crud.delete_row(session, model, record_id):
        raise RecordNotFoundError(table, record_id)
    logger.info(f"DB 브라우저 삭제: table={table}, record_id={record_id}")


async def export_table(session: AsyncSession, table: str) -> tuple[str, str]:
    """테이블 전체를 CSV로 (파일명, 본문)"""
    model = get_model(table)
    records = await database_crud.get_all_rows(session, model)
    if not records:
        raise InvalidRequestError("No data to export")
    content = to_csv(
        database_crud.get_column_names(model),
        [database_crud.row_to_dict(record) for record in records],
    )
    return export_filename(table), content
