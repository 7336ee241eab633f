"""Questions API 통합 테스트"""
import uuid

import pytest
from sqlalchemy import select

from app.models import Question, TestQuestion
from tests.conftest import make_question

QUESTION_PAYLOAD = {
    "question_text": "Which river is the longest in India?",
    "option_a": "Ganga",
    "option_b": "Yamuna",
    "option_c": "Godavari",
    "option_d": "Narmada",
    "correct_answer": "A",
    "subject": "Geography",
}

IMPORT_HEADER = "question_en,option_a_en,option_b_en,option_c_en,option_d_en,correct_option,subject,explanation_en\n"


def import_csv(*rows: str) -> bytes:
    return (IMPORT_HEADER + "".join(f"{row}\n" for row in rows)).encode("utf-8")


@pytest.mark.asyncio
async def test_create_question(client):
    response = await client.post("/api/v1/questions", json=QUESTION_PAYLOAD)

    assert response.status_code == 201
    data = response.json()
    assert data["correct_answer"] == "a"
    assert data["difficulty"] == "medium"


@pytest.mark.asyncio
async def test_create_question_invalid_answer(client):
    response = await client.post("/api/v1/questions", json={**QUESTION_PAYLOAD, "correct_answer": "e"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_question_links_after_max_order(client, test_db_session, sample_test):
    """test_id를 주면 가장 큰 order_index 다음 순서로 연결"""
    existing = make_question()
    test_db_session.add(existing)
    await test_db_session.flush()
    test_db_session.add(TestQuestion(test_id=sample_test.id, question_id=existing.id, order_index=7))
    await test_db_session.commit()

    response = await client.post("/api/v1/questions", json={**QUESTION_PAYLOAD, "test_id": str(sample_test.id)})

    assert response.status_code == 201
    link = await test_db_session.scalar(
        select(TestQuestion).where(TestQuestion.question_id == uuid.UUID(response.json()["id"]))
    )
    assert link.order_index == 8


@pytest.mark.asyncio
async def test_create_question_first_link_starts_at_one(client, test_db_session, sample_test):
    response = await client.post("/api/v1/questions", json={**QUESTION_PAYLOAD, "test_id": str(sample_test.id)})

    link = await test_db_session.scalar(
        select(TestQuestion).where(TestQuestion.question_id == uuid.UUID(response.json()["id"]))
    )
    assert link.order_index == 1


@pytest.mark.asyncio
async def test_create_question_unknown_test(client, test_db_session):
    response = await client.post("/api/v1/questions", json={**QUESTION_PAYLOAD, "test_id": str(uuid.uuid4())})

    assert response.status_code == 404
    assert (await test_db_session.execute(select(Question))).scalars().all() == []


@pytest.mark.asyncio
async def test_list_questions_filters(client, test_db_session):
    test_db_session.add_all(
        [
            make_question(question_text="Speed of light?", subject="Science", difficulty="hard"),
            make_question(question_text="Area of circle?", subject="Maths", difficulty="easy"),
            make_question(question_text="Speed of sound?", subject="Science", difficulty="easy"),
        ]
    )
    await test_db_session.commit()

    response = await client.get("/api/v1/questions", params={"subject": "Science", "search": "speed"})
    data = response.json()
    assert data["total"] == 2
    assert data["total_pages"] == 1

    response = await client.get("/api/v1/questions", params={"subject": "Science", "difficulty": "easy"})
    assert [q["question_text"] for q in response.json()["questions"]] == ["Speed of sound?"]


@pytest.mark.asyncio
async def test_list_questions_pagination(client, test_db_session):
    test_db_session.add_all([make_question(question_text=f"Q{i}") for i in range(25)])
    await test_db_session.commit()

    response = await client.get("/api/v1/questions", params={"page": 2})
    data = response.json()
    assert data["total"] == 25
    assert data["page_size"] == 20
    assert data["total_pages"] == 2
    assert len(data["questions"]) == 5


@pytest.mark.asyncio
async def test_update_and_delete_question(client, test_db_session):
    question = make_question()
    test_db_session.add(question)
    await test_db_session.commit()

    response = await client.patch(f"/api/v1/questions/{question.id}", json={"correct_answer": "C", "topic": "Addition"})
    assert response.status_code == 200
    assert response.json()["correct_answer"] == "c"
    assert response.json()["topic"] == "Addition"

    response = await client.delete(f"/api/v1/questions/{question.id}")
    assert response.status_code == 204

    response = await client.get(f"/api/v1/questions/{question.id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_bulk_delete_questions(client, test_db_session):
    questions = [make_question(question_text=f"Q{i}") for i in range(3)]
    test_db_session.add_all(questions)
    await test_db_session.commit()

    response = await client.post(
        "/api/v1/questions/bulk-delete",
        json={"ids": [str(questions[0].id), str(questions[2].id)]},
    )

    assert response.json() == {"deleted": 2}


@pytest.mark.asyncio
async def test_import_preview(client):
    content = import_csv(
        "Q one,a,b,c,d,b,GK,because",
        ",a,b,c,d,b,GK,",
        "Q three,a,b,c,d,x,GK,",
    )

    response = await client.post(
        "/api/v1/questions/import/preview",
        files={"file": ("questions.csv", content, "text/csv")},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["valid_count"] == 1
    assert data["error_count"] == 2
    assert data["preview"][0]["explanation"] == "because"
    assert data["errors"] == [
        "Row 3: Missing question_en",
        "Row 4: Invalid correct_option (must be a, b, c, or d)",
    ]


@pytest.mark.asyncio
async def test_import_rejects_file_with_errors(client, test_db_session, sample_test):
    content = import_csv("Q one,a,b,c,d,b,GK,", "Q two,a,,c,d,b,GK,")

    response = await client.post(
        "/api/v1/questions/import",
        files={"file": ("questions.csv", content, "text/csv")},
        data={"test_id": str(sample_test.id)},
    )

    assert response.status_code == 400
    assert response.json()["errors"] == ["Row 3: Missing options"]
    assert (await test_db_session.execute(select(Question))).scalars().all() == []


@pytest.mark.asyncio
async def test_import_uploads_and_links(client, test_db_session, sample_test):
    content = import_csv(*[f"Question {i},a,b,c,d,d,Reasoning," for i in range(3)])

    response = await client.post(
        "/api/v1/questions/import",
        files={"file": ("questions.csv", content, "text/csv")},
        data={"test_id": str(sample_test.id)},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["inserted"] == 3
    assert data["linked"] == 3
    assert data["first_order_index"] == 1

    links = (
        await test_db_session.execute(select(TestQuestion).where(TestQuestion.test_id == sample_test.id))
    ).scalars().all()
    assert sorted(link.order_index for link in links) == [1, 2, 3]


@pytest.mark.asyncio
async def test_import_malformed_file(client, sample_test):
    response = await client.post(
        "/api/v1/questions/import",
        files={"file": ("questions.xlsx", b"broken", "application/octet-stream")},
        data={"test_id": str(sample_test.id)},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Failed to parse file"


@pytest.mark.asyncio
async def test_download_template(client):
    response = await client.get("/api/v1/questions/import/template")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert response.content[:2] == b"PK"


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["option_a", "question_text", "correct_answer", "subject", "difficulty"])
async def test_update_question_rejects_null_for_required_field(client, test_db_session, field):
    """필수 컬럼을 null로 보내면 DB 호출 전에 422"""
    question = make_question()
    test_db_session.add(question)
    await test_db_session.commit()

    response = await client.patch(f"/api/v1/questions/{question.id}", json={field: None})

    assert response.status_code == 422
    await test_db_session.refresh(question)
    assert question.option_a == "3"
    assert question.subject == "Maths"


@pytest.mark.asyncio
async def test_update_question_allows_null_for_optional_field(client, test_db_session):
    question = make_question(topic="Addition")
    test_db_session.add(question)
    await test_db_session.commit()

    response = await client.patch(f"/api/v1/questions/{question.id}", json={"topic": None})

    assert response.status_code == 200
    assert response.json()["topic"] is None
