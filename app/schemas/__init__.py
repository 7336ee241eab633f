from app.schemas.importer import (
    ImportedQuestion,
    ImportPreviewResponse,
    ImportResultResponse,
    ImportValidationResult,
)
from app.schemas.question import (
    QuestionCreateRequest,
    QuestionListResponse,
    QuestionResponse,
    QuestionSummaryResponse,
    QuestionUpdateRequest,
)
from app.schemas.test import (
    LinkQuestionsRequest,
    LinkQuestionsResponse,
    TestCreateRequest,
    TestDetailResponse,
    TestListResponse,
    TestResponse,
    TestUpdateRequest,
)
from app.schemas.user import (
    UserDetailResponse,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    "ImportedQuestion",
    "ImportPreviewResponse",
    "ImportResultResponse",
    "ImportValidationResult",
    "QuestionCreateRequest",
    "QuestionListResponse",
    "QuestionResponse",
    "QuestionSummaryResponse",
    "QuestionUpdateRequest",
    "LinkQuestionsRequest",
    "LinkQuestionsResponse",
    "TestCreateRequest",
    "TestDetailResponse",
    "TestListResponse",
    "TestResponse",
    "TestUpdateRequest",
    "UserDetailResponse",
    "UserListResponse",
    "UserResponse",
    "UserUpdateRequest",
]
