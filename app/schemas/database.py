from typing import Any

from pydantic import BaseModel


class TableInfo(BaseModel):
    name: str
    label: str


class TableRowsResponse(BaseModel):
    """DB 브라우저 테이블 조회 결과"""
    table: str
    columns: list[str]
    rows: list[dict[str, Any]]
    total: int
    page: int
    page_size: int
    total_pages: int
