import uuid

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_admin
from app.crud import base as base_crud, content as content_crud
from app.exceptions import RecordNotFoundError
from app.models.base import get_db
from app.models.content import Content
from app.models.user import User
from app.schemas import content as content_schema
from app.services import audit_service, content_service

router = APIRouter(prefix="/materials", tags=["materials"])


def _create_form(
    title: str = Form(...),
    title_hi: str | None = Form(None),
    type: str = Form("pdf"),
    language: str = Form("en"),
    is_free: bool = Form(False),
    category: str | None = Form(None),
    page_count: int | None = Form(None),
    content_text: str | None = Form(None),
    description_en: str | None = Form(None),
    description_hi: str | None = Form(None),
) -> content_schema.MaterialCreateForm:
    return content_schema.MaterialCreateForm(
        title=title,
        title_hi=title_hi,
        type=type,
        language=language,
        is_free=is_free,
        category=category,
        page_count=page_count,
        content_text=content_text,
        description_en=description_en,
        description_hi=description_hi,
    )


def _update_form(
    title: str | None = Form(None),
    title_hi: str | None = Form(None),
    type: str | None = Form(None),
    language: str | None = Form(None),
    is_free: bool | None = Form(None),
    category: str | None = Form(None),
    page_count: int | None = Form(None),
    content_text: str | None = Form(None),
    description_en: str | None = Form(None),
    description_hi: str | None = Form(None),
) -> content_schema.MaterialUpdateForm:
    values = {
        "title": title,
        "title_hi": title_hi,
        "type": type,
        "language": language,
        "is_free": is_free,
        "category": category,
        "page_count": page_count,
        "content_text": content_text,
        "description_en": description_en,
        "description_hi": description_hi,
    }
    # 폼에 포함된 필드만 수정 대상
    return content_schema.MaterialUpdateForm(**{k: v for k, v in values.items() if v is not None})


@router.get("", response_model=content_schema.MaterialListResponse)
async def list_materials(
    type: str | None = None,
    search: str | None = None,
    sort: str = "created_at",
    order: str = "desc",
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """학습 자료 목록 API"""
    materials = await content_crud.list_materials(db, content_type=type, search=search, sort=sort, order=order)
    return content_schema.MaterialListResponse(
        materials=[content_schema.MaterialResponse.model_validate(m) for m in materials],
        total=len(materials),
    )


@router.post("", response_model=content_schema.MaterialResponse, status_code=status.HTTP_201_CREATED)
async def create_material(
    form: content_schema.MaterialCreateForm = Depends(_create_form),
    file: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """학습 자료 생성 API (PDF는 파일 업로드 포함)"""
    material = await content_service.create_material(db, form, file)
    response = content_schema.MaterialResponse.model_validate(material)
    await audit_service.log_action(db, admin, "materials.create", "content", material.id, details={"title": material.title})
    return response


@router.post("/upload", response_model=content_schema.MultiUploadResponse)
async def upload_materials(
    files: list[UploadFile] = File(...),
    category: str = Form("study_material"),
    is_free: bool = Form(False),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """여러 파일 업로드 API"""
    result = await content_service.upload_materials(db, files, category=category, is_free=is_free)
    await audit_service.log_action(
        db,
        admin,
        "materials.upload",
        "content",
        details={"category": category, "uploaded": result.uploaded, "failed": result.failed},
    )
    return result


@router.get("/{material_id}", response_model=content_schema.MaterialResponse)
async def get_material(
    material_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """학습 자료 상세 API"""
    material = await base_crud.get_by_id(db, Content, material_id)
    if not material:
        raise RecordNotFoundError("Material", material_id)
    return content_schema.MaterialResponse.model_validate(material)


@router.patch("/{material_id}", response_model=content_schema.MaterialResponse)
async def update_material(
    material_id: uuid.UUID,
    form: content_schema.MaterialUpdateForm = Depends(_update_form),
    file: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """학습 자료 수정 API (새 파일은 선택)"""
    material = await content_service.update_material(db, material_id, form, file)
    response = content_schema.MaterialResponse.model_validate(material)
    await audit_service.log_action(
        db, admin, "materials.update", "content", material_id, details=form.model_dump(exclude_unset=True)
    )
    return response


@router.delete("/{material_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_material(
    material_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """학습 자료 삭제 API"""
    if not await base_crud.delete_by_id(db, Content, material_id):
        raise RecordNotFoundError("Material", material_id)
    await audit_service.log_action(db, admin, "materials.delete", "content", material_id)
