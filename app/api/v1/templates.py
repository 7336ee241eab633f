import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_admin
from app.crud import base as base_crud, study_template as template_crud
from app.exceptions import RecordNotFoundError
from app.models.base import get_db
from app.models.study_template import StudyTemplate
from app.models.user import User
from app.schemas import study_template as template_schema
from app.services import audit_service

router = APIRouter(prefix="/templates", tags=["templates"])


async def _get_template_or_404(db: AsyncSession, template_id: uuid.UUID) -> StudyTemplate:
    template = await base_crud.get_by_id(db, StudyTemplate, template_id)
    if not template:
        raise RecordNotFoundError("StudyTemplate", template_id)
    return template


@router.get("", response_model=template_schema.TemplateListResponse)
async def list_templates(
    search: str | None = None,
    sort: str = "created_at",
    order: str = "desc",
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """학습 템플릿 목록 API"""
    templates = await template_crud.list_templates(db, search=search, sort=sort, order=order)
    return template_schema.TemplateListResponse(
        templates=[template_schema.TemplateResponse.model_validate(t) for t in templates],
        total=len(templates),
    )


@router.post("", response_model=template_schema.TemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(
    request: template_schema.TemplateCreateRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """학습 템플릿 생성 API"""
    template = await base_crud.create_record(db, StudyTemplate, request.model_dump())
    response = template_schema.TemplateResponse.model_validate(template)
    await audit_service.log_action(
        db, admin, "templates.create", "study_templates", template.id, details={"title": template.title}
    )
    return response


@router.patch("/{template_id}", response_model=template_schema.TemplateResponse)
async def update_template(
    template_id: uuid.UUID,
    request: template_schema.TemplateUpdateRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """학습 템플릿 수정 API"""
    template = await _get_template_or_404(db, template_id)
    changes = request.model_dump(exclude_unset=True)
    template = await base_crud.update_record(db, template, changes)
    response = template_schema.TemplateResponse.model_validate(template)
    await audit_service.log_action(
        db, admin, "templates.update", "study_templates", template_id, details={"fields": sorted(changes)}
    )
    return response


@router.post("/{template_id}/duplicate", response_model=template_schema.TemplateResponse, status_code=status.HTTP_201_CREATED)
async def duplicate_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """학습 템플릿 복제 API ("{title} (Copy)")"""
    source = await _get_template_or_404(db, template_id)
    copy = await base_crud.create_record(
        db,
        StudyTemplate,
        {
            "title": f"{source.title} (Copy)",
            "description": source.description,
            "tasks": list(source.tasks),
            "is_active": source.is_active,
        },
    )
    response = template_schema.TemplateResponse.model_validate(copy)
    await audit_service.log_action(
        db, admin, "templates.duplicate", "study_templates", copy.id, details={"source_id": str(template_id)}
    )
    return response


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """학습 템플릿 삭제 API"""
    if not await base_crud.delete_by_id(db, StudyTemplate, template_id):
        raise RecordNotFoundError("StudyTemplate", template_id)
    await audit_service.log_action(db, admin, "templates.delete", "study_templates", template_id)
