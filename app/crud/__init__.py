from app.crud.base import (
    count_rows,
    create_record,
    delete_by_id,
    delete_by_ids,
    get_by_id,
    update_record,
)
from app.crud.question import (
    get_question_by_id,
    insert_questions_batch,
    list_questions,
)
from app.crud.test import (
    get_test_by_id,
    list_tests,
)
from app.crud.test_question import (
    count_links,
    get_test_questions,
    insert_links,
)
from app.crud.user import (
    get_user_by_email,
    get_user_by_id,
    list_users,
)

__all__ = [
    "count_rows",
    "create_record",
    "update_record",
    "delete_by_id",
    "delete_by_ids",
    "get_by_id",
    "get_question_by_id",
    "insert_questions_batch",
    "list_questions",
    "get_test_by_id",
    "list_tests",
    "count_links",
    "get_test_questions",
    "insert_links",
    "get_user_by_email",
    "get_user_by_id",
    "list_users",
]
