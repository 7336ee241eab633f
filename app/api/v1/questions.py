import logging
import uuid

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import get_current_admin
from app.crud import base as base_crud, question as question_crud
from app.exceptions import ImportValidationError, RecordNotFoundError
from app.models.base import get_db
from app.models.question import Question
from app.models.user import User
from app.schemas import importer as importer_schema, question as question_schema
from app.schemas.user import BulkDeleteRequest, BulkDeleteResponse
from app.services import audit_service, import_service, question_service
from app.utils.spreadsheet import build_question_template, parse_spreadsheet

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/questions", tags=["questions"])

PREVIEW_LIMIT = 10

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("", response_model=question_schema.QuestionListResponse)
async def list_questions(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=100),
    subject: str | None = None,
    difficulty: str | None = None,
    search: str | None = None,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """문제 목록 API"""
    questions, total = await question_crud.list_questions(
        db, page, page_size, subject=subject, difficulty=difficulty, search=search
    )
    return question_schema.QuestionListResponse(
        questions=[question_schema.QuestionResponse.model_validate(q) for q in questions],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=base_crud.total_pages(total, page_size),
    )


@router.post("", response_model=question_schema.QuestionResponse, status_code=status.HTTP_201_CREATED)
async def create_question(
    request: question_schema.QuestionCreateRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """문제 생성 API (test_id가 있으면 시험에 연결)"""
    question = await question_service.create_question(db, request)
    response = question_schema.QuestionResponse.model_validate(question)
    await audit_service.log_action(
        db,
        admin,
        "questions.create",
        "questions",
        question.id,
        details={"test_id": str(request.test_id) if request.test_id else None},
    )
    return response


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_questions(
    request: BulkDeleteRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """선택 문제 일괄 삭제 API"""
    deleted = await base_crud.delete_by_ids(db, Question, request.ids)
    await audit_service.log_action(
        db, admin, "questions.bulk_delete", "questions", details={"ids": [str(i) for i in request.ids], "deleted": deleted}
    )
    return BulkDeleteResponse(deleted=deleted)


@router.get("/import/template")
async def download_import_template(admin: User = Depends(get_current_admin)):
    """일괄 업로드 양식 다운로드 API"""
    return Response(
        content=build_question_template(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="question_upload_template.xlsx"'},
    )


@router.post("/import/preview", response_model=importer_schema.ImportPreviewResponse)
async def preview_import(
    file: UploadFile = File(...),
    admin: User = Depends(get_current_admin),
):
    """업로드 파일 검증 미리보기 API (DB에 쓰지 않음)"""
    rows = parse_spreadsheet(file.filename or "", await file.read())
    result = import_service.validate_rows(rows)
    return importer_schema.ImportPreviewResponse(
        valid_count=len(result.valid),
        error_count=len(result.errors),
        preview=result.valid[:PREVIEW_LIMIT],
        errors=result.errors,
    )


@router.post("/import", response_model=importer_schema.ImportResultResponse, status_code=status.HTTP_201_CREATED)
async def import_questions(
    file: UploadFile = File(...),
    test_id: uuid.UUID = Form(...),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """문제 일괄 업로드 후 시험에 연결 API

    검증 오류가 하나라도 있으면 아무것도 쓰지 않고 400을 반환한다.
    """
    rows = parse_spreadsheet(file.filename or "", await file.read())
    result = import_service.validate_rows(rows)
    if result.errors:
        raise ImportValidationError(result.errors)

    def log_progress(progress: float) -> None:
        logger.info(f"문제 업로드 진행률: test_id={test_id}, progress={progress:.0f}%")

    upload = await import_service.upload_questions(
        db,
        test_id,
        result.valid,
        batch_size=settings.import_batch_size,
        on_progress=log_progress,
        atomic=settings.import_atomic,
    )
    await audit_service.log_action(
        db,
        admin,
        "questions.import",
        "questions",
        test_id,
        details={"filename": file.filename, "inserted": upload.inserted, "first_order_index": upload.first_order_index},
    )
    return upload


@router.get("/{question_id}", response_model=question_schema.QuestionResponse)
async def get_question(
    question_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """문제 상세 API"""
    question = await question_crud.get_question_by_id(db, question_id)
    if not question:
        raise RecordNotFoundError("Question", question_id)
    return question_schema.QuestionResponse.model_validate(question)


@router.patch("/{question_id}", response_model=question_schema.QuestionResponse)
async def update_question(
    question_id: uuid.UUID,
    request: question_schema.QuestionUpdateRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """문제 수정 API"""
    question = await question_crud.get_question_by_id(db, question_id)
    if not question:
        raise RecordNotFoundError("Question", question_id)

    changes = request.model_dump(exclude_unset=True)
    question = await base_crud.update_record(db, question, changes)
    response = question_schema.QuestionResponse.model_validate(question)
    await audit_service.log_action(db, admin, "questions.update", "questions", question_id, details=changes)
    return response


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """문제 삭제 API"""
    if not await base_crud.delete_by_id(db, Question, question_id):
        raise RecordNotFoundError("Question", question_id)
    await audit_service.log_action(db, admin, "questions.delete", "questions", question_id)
