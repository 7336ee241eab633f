import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

Plan = Literal["guest", "free", "pro", "admin"]


class UserResponse(BaseModel):
    """사용자 응답 스키마"""
    id: uuid.UUID
    phone: str | None
    email: str | None
    name: str | None
    plan: str
    exam_type: str | None
    coins: int
    streak_days: int
    last_active_date: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}


class UserListResponse(BaseModel):
    """사용자 목록 응답 스키마 (페이지네이션)"""
    users: list[UserResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class UserUpdateRequest(BaseModel):
    """사용자 정보 수정 요청 (전달된 필드만 반영)"""
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    plan: Plan | None = None
    exam_type: str | None = None
    coins: int | None = Field(None, ge=0)

    @field_validator("plan", "coins")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("null로 변경할 수 없는 필드입니다")
        return v


class BulkDeleteRequest(BaseModel):
    """선택 항목 일괄 삭제 요청"""
    ids: list[uuid.UUID] = Field(..., min_length=1)


class BulkDeleteResponse(BaseModel):
    deleted: int


class PerformanceSummaryResponse(BaseModel):
    total_tests: int
    average_score: float | None
    average_accuracy: float | None
    total_questions_attempted: int
    avg_time_per_question: float | None

    model_config = {"from_attributes": True}


class SubjectPerformanceResponse(BaseModel):
    subject: str
    questions_attempted: int
    correct_answers: int
    accuracy: float | None

    model_config = {"from_attributes": True}


class TestAttemptResponse(BaseModel):
    """응시 기록 응답 스키마"""
    id: uuid.UUID
    test_title: str | None = None
    score: float | None
    accuracy: float | None
    total_questions: int
    correct_answers: int
    wrong_answers: int
    duration_seconds: int | None
    completed_at: datetime | None

    model_config = {"from_attributes": True}

    __test__ = False


class UserDetailResponse(BaseModel):
    """사용자 상세 (기본 정보 + 성적 + 최근 응시)"""
    user: UserResponse
    performance: PerformanceSummaryResponse | None
    subjects: list[SubjectPerformanceResponse]
    recent_tests: list[TestAttemptResponse]
