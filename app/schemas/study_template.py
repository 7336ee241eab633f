import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class TemplateTask(BaseModel):
    title: str = Field(..., min_length=1, description="Task title is required")
    subject: str = Field("General", min_length=1)
    description: str | None = None


class TemplateCreateRequest(BaseModel):
    """학습 템플릿 생성 요청 (과제 최소 1개)"""
    title: str = Field(..., min_length=1)
    description: str | None = None
    tasks: list[TemplateTask] = Field(..., min_length=1)
    is_active: bool = True


class TemplateUpdateRequest(BaseModel):
    title: str | None = Field(None, min_length=1)
    description: str | None = None
    tasks: list[TemplateTask] | None = Field(None, min_length=1)
    is_active: bool | None = None

    @field_validator("title", "tasks", "is_active")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("null로 변경할 수 없는 필드입니다")
        return v


class TemplateResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: str | None
    tasks: list[TemplateTask]
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class TemplateListResponse(BaseModel):
    templates: list[TemplateResponse]
    total: int
