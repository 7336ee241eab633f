import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_current_admin
from app.crud import base as base_crud, test as test_crud, test_question as test_question_crud
from app.exceptions import RecordNotFoundError
from app.models.base import get_db
from app.models.test import Test
from app.models.user import User
from app.schemas import test as test_schema
from app.schemas.question import AvailableQuestionListResponse
from app.services import audit_service, test_service

router = APIRouter(prefix="/tests", tags=["tests"])


@router.get("", response_model=test_schema.TestListResponse)
async def list_tests(
    test_type: str | None = None,
    search: str | None = None,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """시험 목록 API"""
    tests = await test_crud.list_tests(db, test_type=test_type, search=search)
    return test_schema.TestListResponse(
        tests=[test_schema.TestResponse.model_validate(t) for t in tests],
        total=len(tests),
    )


@router.post("", response_model=test_schema.TestResponse, status_code=status.HTTP_201_CREATED)
async def create_test(
    request: test_schema.TestCreateRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """시험 생성 API"""
    test = await test_service.create_test(db, request)
    response = test_schema.TestResponse.model_validate(test)
    await audit_service.log_action(db, admin, "tests.create", "tests", test.id, details={"title": test.title})
    return response


@router.get("/{test_id}", response_model=test_schema.TestDetailResponse)
async def get_test(
    test_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """시험 상세 API (연결된 문제 포함)"""
    return await test_service.get_test_detail(db, test_id)


@router.patch("/{test_id}", response_model=test_schema.TestResponse)
async def update_test(
    test_id: uuid.UUID,
    request: test_schema.TestUpdateRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """시험 수정 API"""
    test = await test_service.get_test_or_404(db, test_id)
    changes = request.model_dump(exclude_unset=True)
    test = await base_crud.update_record(db, test, changes)
    response = test_schema.TestResponse.model_validate(test)
    await audit_service.log_action(db, admin, "tests.update", "tests", test_id, details=changes)
    return response


@router.delete("/{test_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_test(
    test_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """시험 삭제 API"""
    if not await base_crud.delete_by_id(db, Test, test_id):
        raise RecordNotFoundError("Test", test_id)
    await audit_service.log_action(db, admin, "tests.delete", "tests", test_id)


@router.get("/{test_id}/available-questions", response_model=AvailableQuestionListResponse)
async def get_available_questions(
    test_id: uuid.UUID,
    subject: str | None = None,
    search: str | None = None,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """연결 가능한 문제 후보 API"""
    return await test_service.get_available_questions(db, test_id, subject=subject, search=search)


@router.post("/{test_id}/questions", response_model=test_schema.LinkQuestionsResponse)
async def link_questions(
    test_id: uuid.UUID,
    request: test_schema.LinkQuestionsRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """선택 문제 연결 API"""
    result = await test_service.link_questions(db, test_id, request.question_ids)
    await audit_service.log_action(
        db, admin, "tests.link_questions", "test_questions", test_id, details=result.model_dump()
    )
    return result


@router.delete("/{test_id}/questions/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unlink_question(
    test_id: uuid.UUID,
    question_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """시험에서 문제 연결 해제 API"""
    if not await test_question_crud.delete_link(db, test_id, question_id):
        raise RecordNotFoundError("TestQuestion", f"{test_id}/{question_id}")
    await audit_service.log_action(
        db, admin, "tests.unlink_question", "test_questions", test_id, details={"question_id": str(question_id)}
    )
