"""Import Service 테스트"""
import math
import uuid
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.crud import question as question_crud
from app.exceptions import BatchInsertError, InvalidRequestError, RecordNotFoundError
from app.models import Question, TestQuestion
from app.schemas.importer import ImportedQuestion
from app.services import import_service
from tests.conftest import make_question


def make_row(**overrides) -> dict:
    row = {
        "question_en": "Who wrote the Ramayana?",
        "question_hi": "रामायण किसने लिखी?",
        "option_a_en": "Valmiki",
        "option_b_en": "Tulsidas",
        "option_c_en": "Kalidasa",
        "option_d_en": "Vyasa",
        "correct_option": "A",
        "subject": "History",
    }
    row.update(overrides)
    return row


def make_imported(count: int) -> list[ImportedQuestion]:
    return [
        ImportedQuestion(
            question_text=f"Question {i}",
            option_a="a",
            option_b="b",
            option_c="c",
            option_d="d",
            correct_answer="a",
            subject="GK",
        )
        for i in range(count)
    ]


async def count_questions(session) -> int:
    return await session.scalar(select(func.count()).select_from(Question))


def test_validate_rows_transforms_valid_row():
    """유효한 행은 저장 형태로 변환"""
    result = import_service.validate_rows([make_row(explanation="fallback explanation")])

    assert result.errors == []
    question = result.valid[0]
    assert question.question_text == "Who wrote the Ramayana?"
    assert question.question_text_hi == "रामायण किसने लिखी?"
    assert question.correct_answer == "a"
    assert question.difficulty == "medium"
    assert question.explanation == "fallback explanation"
    assert question.option_a_hi is None


def test_validate_rows_lowercases_difficulty():
    result = import_service.validate_rows([make_row(difficulty="HARD"), make_row(difficulty="Easy")])
    assert [q.difficulty for q in result.valid] == ["hard", "easy"]


def test_validate_rows_prefers_explanation_en():
    result = import_service.validate_rows([make_row(explanation_en="english", explanation="other")])
    assert result.valid[0].explanation == "english"


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"question_en": None}, "Row 2: Missing question_en"),
        ({"option_c_en": "  "}, "Row 2: Missing options"),
        ({"correct_option": "e"}, "Row 2: Invalid correct_option (must be a, b, c, or d)"),
        ({"correct_option": None}, "Row 2: Invalid correct_option (must be a, b, c, or d)"),
        ({"subject": None}, "Row 2: Missing subject"),
    ],
)
def test_validate_rows_error_messages(overrides, message):
    result = import_service.validate_rows([make_row(**overrides)])
    assert result.valid == []
    assert result.errors == [message]


def test_validate_rows_first_failure_wins():
    """한 행에 여러 문제가 있어도 오류는 하나"""
    result = import_service.validate_rows([make_row(question_en=None, subject=None, correct_option="z")])
    assert result.errors == ["Row 2: Missing question_en"]


def test_validate_rows_counts_and_row_numbers():
    rows = [make_row(), make_row(subject=None), make_row(), make_row(option_a_en=None)]
    result = import_service.validate_rows(rows)

    assert len(result.valid) + len(result.errors) == len(rows)
    assert result.total_rows == 4
    assert result.errors == ["Row 3: Missing subject", "Row 5: Missing options"]


def test_chunked_batch_count():
    items = list(range(250))
    batches = list(import_service.chunked(items, 100))
    assert len(batches) == math.ceil(250 / 100)
    assert [len(b) for b in batches] == [100, 100, 50]


def test_chunked_rejects_zero_size():
    with pytest.raises(ValueError):
        list(import_service.chunked([1, 2], 0))


@pytest.mark.asyncio
async def test_upload_questions_empty_list(test_db_session, sample_test):
    with pytest.raises(InvalidRequestError):
        await import_service.upload_questions(test_db_session, sample_test.id, [])


@pytest.mark.asyncio
async def test_upload_questions_unknown_test(test_db_session):
    with pytest.raises(RecordNotFoundError):
        await import_service.upload_questions(test_db_session, uuid.uuid4(), make_imported(1))
    assert await count_questions(test_db_session) == 0


@pytest.mark.asyncio
async def test_upload_questions_links_after_existing(test_db_session, sample_test):
    """order_index는 기존 연결 수 + 1부터 빈틈없이 증가"""
    existing = [make_question(question_text=f"existing {i}") for i in range(2)]
    test_db_session.add_all(existing)
    await test_db_session.flush()
    test_db_session.add_all(
        [TestQuestion(test_id=sample_test.id, question_id=q.id, order_index=i + 1) for i, q in enumerate(existing)]
    )
    await test_db_session.commit()

    result = await import_service.upload_questions(test_db_session, sample_test.id, make_imported(5), batch_size=2)

    assert result.inserted == 5
    assert result.linked == 5
    assert result.first_order_index == 3

    links = (
        await test_db_session.execute(
            select(TestQuestion)
            .where(TestQuestion.question_id.in_(result.question_ids))
            .order_by(TestQuestion.order_index)
        )
    ).scalars().all()
    assert [link.order_index for link in links] == [3, 4, 5, 6, 7]
    # 입력 순서와 연결 순서가 일치
    assert [link.question_id for link in links] == result.question_ids


@pytest.mark.asyncio
async def test_upload_questions_progress(test_db_session, sample_test):
    """문제 단계 0~50, 연결 단계 50~100"""
    progress: list[float] = []

    await import_service.upload_questions(
        test_db_session,
        sample_test.id,
        make_imported(250),
        batch_size=100,
        on_progress=progress.append,
    )

    assert progress == pytest.approx([50 / 3, 100 / 3, 50, 50 + 50 / 3, 50 + 100 / 3, 100])
    assert await count_questions(test_db_session) == 250


def _fail_on_second_batch():
    real_insert = question_crud.insert_questions_batch
    calls = {"count": 0}

    async def insert(session, rows):
        calls["count"] += 1
        if calls["count"] == 2:
            raise OperationalError("INSERT INTO questions", {}, Exception("disk I/O error"))
        return await real_insert(session, rows)

    return insert


@pytest.mark.asyncio
async def test_upload_questions_atomic_rolls_back_everything(test_db_session, sample_test):
    with patch.object(question_crud, "insert_questions_batch", side_effect=_fail_on_second_batch()):
        with pytest.raises(BatchInsertError) as exc_info:
            await import_service.upload_questions(
                test_db_session, sample_test.id, make_imported(5), batch_size=2, atomic=True
            )

    assert exc_info.value.phase == "questions"
    assert exc_info.value.batch_number == 2
    assert exc_info.value.total_batches == 3
    assert "disk I/O error" in exc_info.value.detail
    assert await count_questions(test_db_session) == 0


@pytest.mark.asyncio
async def test_upload_questions_non_atomic_keeps_committed_batches(test_db_session, sample_test):
    with patch.object(question_crud, "insert_questions_batch", side_effect=_fail_on_second_batch()):
        with pytest.raises(BatchInsertError):
            await import_service.upload_questions(
                test_db_session, sample_test.id, make_imported(5), batch_size=2, atomic=False
            )

    assert await count_questions(test_db_session) == 2


@pytest.mark.asyncio
async def test_upload_questions_stops_after_failed_batch(test_db_session, sample_test):
    """실패 이후 배치는 실행하지 않음 (재시도 없음)"""
    mock_insert = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("boom")))
    with patch.object(question_crud, "insert_questions_batch", mock_insert):
        with pytest.raises(BatchInsertError):
            await import_service.upload_questions(test_db_session, sample_test.id, make_imported(5), batch_size=2)

    assert mock_insert.await_count == 1
