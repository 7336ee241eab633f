import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class MaterialBase(BaseModel):
    title: str = Field(..., min_length=1, description="자료 제목 (영문)")
    title_hi: str | None = None
    type: str = Field("pdf", description="자료 유형 (pdf, formula, current_affairs, notes 등)")
    language: str = "en"
    is_free: bool = False
    category: str | None = None
    page_count: int | None = Field(None, ge=0)
    content_text: str | None = None
    description_en: str | None = None
    description_hi: str | None = None


class MaterialCreateForm(MaterialBase):
    """자료 생성 폼 (PDF는 파일 필수, 그 외 유형은 본문 필수)"""

    def validate_source(self, has_file: bool) -> None:
        if self.type == "pdf" and not has_file:
            raise ValueError("Please select a PDF file")
        if self.type != "pdf" and not self.content_text:
            raise ValueError("Content text is required")


class MaterialUpdateForm(BaseModel):
    """자료 수정 폼 (전달된 필드만 반영)"""
    title: str | None = Field(None, min_length=1)
    title_hi: str | None = None
    type: str | None = None
    language: str | None = None
    is_free: bool | None = None
    category: str | None = None
    page_count: int | None = Field(None, ge=0)
    content_text: str | None = None
    description_en: str | None = None
    description_hi: str | None = None


class MaterialResponse(MaterialBase):
    """학습 자료 응답 스키마"""
    id: uuid.UUID
    file_url: str | None
    file_size: int | None
    file_size_mb: float | None
    file_metadata: dict[str, Any] | None = Field(None, serialization_alias="metadata")
    created_at: datetime

    model_config = {"from_attributes": True}


class MaterialListResponse(BaseModel):
    materials: list[MaterialResponse]
    total: int


class UploadedFileResult(BaseModel):
    """다중 업로드의 파일별 결과"""
    filename: str
    status: str = Field(..., description="success 또는 error")
    url: str | None = None
    material_id: uuid.UUID | None = None
    error: str | None = None


class MultiUploadResponse(BaseModel):
    uploaded: int
    failed: int
    results: list[UploadedFileResult]
