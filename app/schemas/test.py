import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.question import QuestionSummaryResponse


class TestCreateRequest(BaseModel):
    """시험 생성 요청 스키마"""
    __test__ = False

    title: str = Field(..., min_length=1, description="시험 제목 (영문)")
    title_hi: str | None = Field(None, description="시험 제목 (힌디어)")
    description: str | None = None
    test_type: str = Field("mock", description="시험 유형 (mock, sectional 등)")
    duration_minutes: int = Field(60, ge=1)
    total_marks: int = Field(200, ge=0)
    passing_marks: int = Field(70, ge=0)
    difficulty: str = "medium"
    is_free: bool = False


class TestUpdateRequest(BaseModel):
    """시험 수정 요청 스키마 (slug는 URL 유지를 위해 변경하지 않음)"""
    __test__ = False

    title: str | None = Field(None, min_length=1)
    title_hi: str | None = None
    description: str | None = None
    test_type: str | None = None
    duration_minutes: int | None = Field(None, ge=1)
    total_marks: int | None = Field(None, ge=0)
    passing_marks: int | None = Field(None, ge=0)
    difficulty: str | None = None
    is_free: bool | None = None

    @field_validator(
        "title", "test_type", "duration_minutes", "total_marks", "passing_marks", "difficulty", "is_free"
    )
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("null로 변경할 수 없는 필드입니다")
        return v


class TestResponse(BaseModel):
    """시험 응답 스키마"""
    __test__ = False

    id: uuid.UUID
    title: str
    title_hi: str | None
    description: str | None
    slug: str
    test_type: str
    duration_minutes: int
    total_marks: int
    passing_marks: int
    difficulty: str
    is_free: bool
    total_questions: int
    total_attempts: int
    created_at: datetime

    model_config = {"from_attributes": True}


class TestListResponse(BaseModel):
    __test__ = False

    tests: list[TestResponse]
    total: int


class TestQuestionResponse(BaseModel):
    """시험에 연결된 문제 (출제 순서 포함)"""
    __test__ = False

    question_id: uuid.UUID
    order_index: int
    question: QuestionSummaryResponse

    model_config = {"from_attributes": True}


class TestDetailResponse(BaseModel):
    __test__ = False

    test: TestResponse
    questions: list[TestQuestionResponse]


class LinkQuestionsRequest(BaseModel):
    """선택한 문제들을 시험에 연결"""
    question_ids: list[uuid.UUID] = Field(..., min_length=1)


class LinkQuestionsResponse(BaseModel):
    linked: int
    first_order_index: int
