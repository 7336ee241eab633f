import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

Difficulty = Literal["easy", "medium", "hard"]


def normalize_correct_answer(value: str) -> str:
    """정답 선택지를 소문자 a~d로 정규화"""
    answer = value.strip().lower()
    if answer not in ("a", "b", "c", "d"):
        raise ValueError("correct_answer는 a, b, c, d 중 하나여야 합니다")
    return answer


class QuestionBase(BaseModel):
    question_text: str = Field(..., min_length=1, description="문제 본문 (영문)")
    question_text_hi: str | None = Field(None, description="문제 본문 (힌디어)")
    option_a: str = Field(..., min_length=1)
    option_a_hi: str | None = None
    option_b: str = Field(..., min_length=1)
    option_b_hi: str | None = None
    option_c: str = Field(..., min_length=1)
    option_c_hi: str | None = None
    option_d: str = Field(..., min_length=1)
    option_d_hi: str | None = None
    correct_answer: str = Field(..., description="정답 선택지 (a, b, c, d)")
    subject: str = Field(..., min_length=1)
    topic: str | None = None
    difficulty: Difficulty = "medium"
    explanation: str | None = None
    explanation_hi: str | None = None

    @field_validator("correct_answer")
    @classmethod
    def validate_correct_answer(cls, v: str) -> str:
        return normalize_correct_answer(v)


class QuestionCreateRequest(QuestionBase):
    """문제 생성 요청 (test_id를 주면 해당 시험 마지막 순서로 연결)"""
    test_id: uuid.UUID | None = Field(None, description="연결할 시험 ID (선택)")


class QuestionUpdateRequest(BaseModel):
    """문제 수정 요청 (전달된 필드만 반영)"""
    question_text: str | None = Field(None, min_length=1)
    question_text_hi: str | None = None
    option_a: str | None = Field(None, min_length=1)
    option_a_hi: str | None = None
    option_b: str | None = Field(None, min_length=1)
    option_b_hi: str | None = None
    option_c: str | None = Field(None, min_length=1)
    option_c_hi: str | None = None
    option_d: str | None = Field(None, min_length=1)
    option_d_hi: str | None = None
    correct_answer: str | None = None
    subject: str | None = Field(None, min_length=1)
    topic: str | None = None
    difficulty: Difficulty | None = None
    explanation: str | None = None
    explanation_hi: str | None = None

    @field_validator(
        "question_text", "option_a", "option_b", "option_c", "option_d", "correct_answer", "subject", "difficulty"
    )
    @classmethod
    def reject_null(cls, v):
        # NOT NULL 컬럼은 생략만 가능하고 null로 비울 수 없음
        if v is None:
            raise ValueError("null로 변경할 수 없는 필드입니다")
        return v

    @field_validator("correct_answer")
    @classmethod
    def validate_correct_answer(cls, v: str) -> str:
        return normalize_correct_answer(v)


class QuestionResponse(QuestionBase):
    """문제 응답 스키마"""
    id: uuid.UUID
    # 일괄 업로드된 문제는 임의의 난이도 문자열을 가질 수 있다
    difficulty: str
    created_at: datetime

    model_config = {"from_attributes": True}


class QuestionSummaryResponse(BaseModel):
    """목록/연결 화면용 요약"""
    id: uuid.UUID
    question_text: str
    question_text_hi: str | None
    subject: str
    difficulty: str
    topic: str | None

    model_config = {"from_attributes": True}


class QuestionListResponse(BaseModel):
    questions: list[QuestionResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class AvailableQuestionListResponse(BaseModel):
    questions: list[QuestionSummaryResponse]
    total: int
