import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import question as question_crud, test as test_crud, test_question as test_question_crud
from app.exceptions import BaseAppError, RecordNotFoundError
from app.models.question import Question
from app.schemas.question import QuestionCreateRequest

logger = logging.getLogger(__name__)


async def create_question(session: AsyncSession, request: QuestionCreateRequest) -> Question:
    """문제 생성, test_id가 있으면 해당 시험 마지막 순서(max + 1)로 연결"""
    data = request.model_dump(exclude={"test_id"})
    try:
        if request.test_id:
            test = await test_crud.get_test_by_id(session, request.test_id)
            if not test:
                raise RecordNotFoundError("Test", request.test_id)

        question = await question_crud.add_question(session, data)

        if request.test_id:
            max_order = await test_question_crud.get_max_order_index(session, request.test_id)
            await test_question_crud.insert_links(
                session,
                [{"test_id": request.test_id, "question_id": question.id, "order_index": max_order + 1}],
            )

        await session.commit()
        await session.refresh(question)
    except BaseAppError:
        raise
    except Exception as e:
        logger.error(f"문제 생성 실패: {e}, test_id={request.test_id}", exc_info=True)
        await session.rollback()
        raise

    logger.info(f"문제 생성: question_id={question.id}, test_id={request.test_id}")
    return question
