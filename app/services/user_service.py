import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import user as user_crud
from app.crud.database import get_column_names, row_to_dict
from app.exceptions import RecordNotFoundError
from app.models.user import User
from app.schemas import user as user_schema
from app.utils.csv_export import export_filename, to_csv

RECENT_ATTEMPTS_LIMIT = 10


async def get_user_detail(session: AsyncSession, user_id: uuid.UUID) -> user_schema.UserDetailResponse:
    """사용자 상세: 기본 정보, 성적 요약, 과목별 성적, 최근 완료 응시 10건"""
    user = await user_crud.get_user_by_id(session, user_id)
    if not user:
        raise RecordNotFoundError("User", user_id)

    performance = await user_crud.get_performance_summary(session, user_id)
    subjects = await user_crud.get_subject_performance(session, user_id)
    attempts = await user_crud.get_recent_attempts(session, user_id, limit=RECENT_ATTEMPTS_LIMIT)

    recent_tests = []
    for attempt in attempts:
        response = user_schema.TestAttemptResponse.model_validate(attempt)
        response.test_title = attempt.test.title if attempt.test else None
        recent_tests.append(response)

    return user_schema.UserDetailResponse(
        user=user_schema.UserResponse.model_validate(user),
        performance=user_schema.PerformanceSummaryResponse.model_validate(performance) if performance else None,
        subjects=[user_schema.SubjectPerformanceResponse.model_validate(s) for s in subjects],
        recent_tests=recent_tests,
    )


async def export_users(session: AsyncSession) -> tuple[str, str]:
    """전체 사용자 CSV (파일명, 본문)"""
    users = await user_crud.get_all_users(session)
    headers = get_column_names(User)
    content = to_csv(headers, [row_to_dict(user) for user in users])
    return export_filename("users"), content
