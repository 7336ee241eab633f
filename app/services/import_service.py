"""문제 일괄 업로드: 행 검증 → 배치 입력 → 시험 연결"""
import logging
import math
import uuid
from typing import Any, Callable, Iterator, Sequence, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.crud import question as question_crud, test as test_crud, test_question as test_question_crud
from app.exceptions import BatchInsertError, InvalidRequestError, RecordNotFoundError
from app.models.question import CORRECT_OPTIONS
from app.schemas.importer import ImportedQuestion, ImportResultResponse, ImportValidationResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

OPTION_COLUMNS = ("option_a_en", "option_b_en", "option_c_en", "option_d_en")

ProgressCallback = Callable[[float], None]


def _value(row: dict[str, Any], key: str) -> str | None:
    value = row.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def validate_row(row: dict[str, Any], row_number: int) -> tuple[ImportedQuestion | None, str | None]:
    """한 행 검증. 첫 번째로 실패한 검사의 오류 메시지만 반환"""
    if not _value(row, "question_en"):
        return None, f"Row {row_number}: Missing question_en"
    if not all(_value(row, column) for column in OPTION_COLUMNS):
        return None, f"Row {row_number}: Missing options"
    correct = (_value(row, "correct_option") or "").lower()
    if correct not in CORRECT_OPTIONS:
        return None, f"Row {row_number}: Invalid correct_option (must be a, b, c, or d)"
    if not _value(row, "subject"):
        return None, f"Row {row_number}: Missing subject"

    question = ImportedQuestion(
        question_text=_value(row, "question_en"),
        question_text_hi=_value(row, "question_hi"),
        option_a=_value(row, "option_a_en"),
        option_a_hi=_value(row, "option_a_hi"),
        option_b=_value(row, "option_b_en"),
        option_b_hi=_value(row, "option_b_hi"),
        option_c=_value(row, "option_c_en"),
        option_c_hi=_value(row, "option_c_hi"),
        option_d=_value(row, "option_d_en"),
        option_d_hi=_value(row, "option_d_hi"),
        correct_answer=correct,
        subject=_value(row, "subject"),
        difficulty=(_value(row, "difficulty") or "medium").lower(),
        explanation=_value(row, "explanation_en") or _value(row, "explanation"),
        explanation_hi=_value(row, "explanation_hi"),
    )
    return question, None


def validate_rows(rows: Sequence[dict[str, Any]]) -> ImportValidationResult:
    """전체 행 검증 (행 번호 = index + 2, 1행은 헤더)"""
    result = ImportValidationResult()
    for index, row in enumerate(rows):
        question, error = validate_row(row, index + 2)
        if error:
            result.errors.append(error)
        else:
            result.valid.append(question)
    return result


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """size 단위로 자르기 (마지막 조각은 더 작을 수 있음)"""
    if size < 1:
        raise ValueError("batch size는 1 이상이어야 합니다")
    for start in range(0, len(items), size):
        yield items[start:start + size]


async def _run_batch(
    session: AsyncSession,
    phase: str,
    batch_number: int,
    total_batches: int,
    atomic: bool,
    operation,
):
    try:
        result = await operation()
        if not atomic:
            await session.commit()
        return result
    except SQLAlchemyError as e:
        await session.rollback()
        detail = str(getattr(e, "orig", None) or e)
        logger.error(
            f"배치 입력 실패: phase={phase}, batch={batch_number}/{total_batches}, "
            f"atomic={atomic}, error={detail}"
        )
        raise BatchInsertError(phase, batch_number, total_batches, detail) from e


async def upload_questions(
    session: AsyncSession,
    test_id: uuid.UUID,
    questions: Sequence[ImportedQuestion],
    batch_size: int | None = None,
    on_progress: ProgressCallback | None = None,
    atomic: bool | None = None,
) -> ImportResultResponse:
    """검증된 문제를 배치 단위로 입력하고 시험 마지막 순서 뒤에 연결

    atomic=True면 두 단계 전체가 한 트랜잭션이고, False면 배치마다 커밋되어
    실패 이전 배치는 그대로 남는다. 배치는 순서대로 하나씩 실행한다.
    """
    batch_size = batch_size or settings.import_batch_size
    atomic = settings.import_atomic if atomic is None else atomic

    if not questions:
        raise InvalidRequestError("업로드할 문제가 없습니다")

    test = await test_crud.get_test_by_id(session, test_id)
    if not test:
        raise RecordNotFoundError("Test", test_id)

    existing = await test_question_crud.count_links(session, test_id)
    first_order_index = existing + 1

    def report(value: float) -> None:
        if on_progress:
            on_progress(value)

    # 1단계: 문제 입력
    question_batches = list(chunked(list(questions), batch_size))
    total_question_batches = len(question_batches)
    question_ids: list[uuid.UUID] = []
    for i, batch in enumerate(question_batches, start=1):
        rows = [question.model_dump() for question in batch]
        ids = await _run_batch(
            session,
            "questions",
            i,
            total_question_batches,
            atomic,
            lambda rows=rows: question_crud.insert_questions_batch(session, rows),
        )
        question_ids.extend(ids)
        report(i / total_question_batches * 50)

    # 2단계: 시험 연결 (기존 연결 수 + 1부터 빈틈없이)
    links = [
        {"test_id": test_id, "question_id": question_id, "order_index": first_order_index + offset}
        for offset, question_id in enumerate(question_ids)
    ]
    link_batches = list(chunked(links, batch_size))
    total_link_batches = len(link_batches)
    for j, batch in enumerate(link_batches, start=1):
        await _run_batch(
            session,
            "links",
            j,
            total_link_batches,
            atomic,
            lambda batch=batch: test_question_crud.insert_links(session, list(batch)),
        )
        report(50 + j / total_link_batches * 50)

    if atomic:
        try:
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise BatchInsertError("links", total_link_batches, total_link_batches, str(e)) from e

    logger.info(
        f"문제 일괄 업로드 완료: test_id={test_id}, inserted={len(question_ids)}, "
        f"batches={math.ceil(len(questions) / batch_size)}, first_order_index={first_order_index}, atomic={atomic}"
    )
    return ImportResultResponse(
        test_id=test_id,
        inserted=len(question_ids),
        linked=len(links),
        first_order_index=first_order_index,
        question_ids=question_ids,
    )
