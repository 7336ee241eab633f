import uuid

from pydantic import BaseModel, Field


class ImportedQuestion(BaseModel):
    """스프레드시트 한 행을 저장 형태로 변환한 문제"""
    question_text: str
    question_text_hi: str | None = None
    option_a: str
    option_a_hi: str | None = None
    option_b: str
    option_b_hi: str | None = None
    option_c: str
    option_c_hi: str | None = None
    option_d: str
    option_d_hi: str | None = None
    correct_answer: str
    subject: str
    difficulty: str = "medium"
    explanation: str | None = None
    explanation_hi: str | None = None


class ImportValidationResult(BaseModel):
    """검증 결과: 유효한 행과 행 번호가 붙은 오류 메시지"""
    valid: list[ImportedQuestion] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return len(self.valid) + len(self.errors)


class ImportPreviewResponse(BaseModel):
    """업로드 전 미리보기 응답"""
    valid_count: int
    error_count: int
    preview: list[ImportedQuestion] = Field(..., description="앞쪽 일부 유효 문항")
    errors: list[str]


class ImportResultResponse(BaseModel):
    """업로드 및 시험 연결 결과"""
    test_id: uuid.UUID
    inserted: int
    linked: int
    first_order_index: int | None
    question_ids: list[uuid.UUID]
