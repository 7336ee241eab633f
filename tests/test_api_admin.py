"""운영 화면 API 통합 테스트 (설정, 신고, DB 브라우저, 템플릿, 알림, 감사 로그)"""
import uuid
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import select

from app.models import AuditLog, Report, Setting, User
from tests.conftest import make_question


@pytest.mark.asyncio
async def test_get_me(client):
    response = await client.get("/api/v1/auth/me")
    assert response.json()["email"] == "admin@sscexamhub.com"


@pytest.mark.asyncio
async def test_settings_defaults(client):
    response = await client.get("/api/v1/settings")

    assert response.status_code == 200
    data = response.json()
    assert data["app"]["name"] == "SSC Exam Hub"
    assert data["payment"]["proPlanPrice"] == 499
    assert data["ai"]["freeCreditLimit"] == 3


@pytest.mark.asyncio
async def test_settings_merge_stored_values(client, test_db_session):
    test_db_session.add(Setting(key="email", value={"smtpHost": "smtp.sscexamhub.com"}))
    test_db_session.add(Setting(key="unknown", value={"foo": "bar"}))
    await test_db_session.commit()

    data = (await client.get("/api/v1/settings")).json()

    assert data["email"]["smtpHost"] == "smtp.sscexamhub.com"
    assert data["email"]["smtpPort"] == 587
    assert "unknown" not in data


@pytest.mark.asyncio
async def test_save_settings_twice_upserts(client, test_db_session):
    payload = (await client.get("/api/v1/settings")).json()
    payload["app"]["name"] = "SSC Hub"
    assert (await client.put("/api/v1/settings", json=payload)).status_code == 200

    payload["app"]["name"] = "SSC Exam Hub Pro"
    response = await client.put("/api/v1/settings", json=payload)
    assert response.json()["app"]["name"] == "SSC Exam Hub Pro"

    rows = (await test_db_session.execute(select(Setting))).scalars().all()
    assert sorted(row.key for row in rows) == ["ai", "app", "email", "payment", "storage"]
    assert (await client.get("/api/v1/settings")).json()["app"]["name"] == "SSC Exam Hub Pro"


@pytest.mark.asyncio
async def test_grant_and_revoke_admin(client, test_db_session):
    user = User(email="moderator@example.com", name="Moderator")
    test_db_session.add(user)
    await test_db_session.commit()

    response = await client.post("/api/v1/settings/admins", json={"email": "moderator@example.com"})
    assert response.status_code == 200
    assert response.json()["plan"] == "admin"

    admins = (await client.get("/api/v1/settings/admins")).json()
    assert {a["email"] for a in admins} == {"admin@sscexamhub.com", "moderator@example.com"}

    response = await client.delete(f"/api/v1/settings/admins/{user.id}")
    assert response.json()["plan"] == "free"


@pytest.mark.asyncio
async def test_grant_admin_unknown_email(client):
    response = await client.post("/api/v1/settings/admins", json={"email": "nobody@example.com"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_cannot_revoke_self(client, admin_user):
    response = await client.delete(f"/api/v1/settings/admins/{admin_user.id}")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_reports_default_to_pending(client, test_db_session, admin_user):
    pending = Report(user_id=admin_user.id, type="question_error", message="Answer is wrong")
    resolved = Report(user_id=admin_user.id, type="bug", message="App crashed", status="resolved")
    test_db_session.add_all([pending, resolved])
    await test_db_session.commit()

    response = await client.get("/api/v1/reports")
    assert [r["message"] for r in response.json()["reports"]] == ["Answer is wrong"]

    response = await client.get("/api/v1/reports", params={"status": "all"})
    assert response.json()["total"] == 2

    response = await client.patch(
        f"/api/v1/reports/{pending.id}", json={"status": "resolved", "admin_note": "Fixed option b"}
    )
    assert response.json()["status"] == "resolved"
    assert response.json()["admin_note"] == "Fixed option b"

    response = await client.patch(f"/api/v1/reports/{pending.id}", json={"status": "closed"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_database_tables(client):
    response = await client.get("/api/v1/database/tables")
    names = [t["name"] for t in response.json()]
    assert names == ["users", "tests", "questions", "content", "test_attempts", "payments"]


@pytest.mark.asyncio
async def test_database_browse_and_search(client, test_db_session):
    test_db_session.add_all(
        [
            make_question(question_text="Who wrote Gitanjali?"),
            make_question(question_text="Capital of Assam?"),
        ]
    )
    await test_db_session.commit()

    response = await client.get("/api/v1/database/questions")
    data = response.json()
    assert data["total"] == 2
    assert data["page_size"] == 50
    assert "question_text" in data["columns"]

    response = await client.get("/api/v1/database/questions", params={"search": "gitan,jali", "page": 3})
    data = response.json()
    assert data["total"] == 1
    assert data["page"] == 1
    assert data["rows"][0]["question_text"] == "Who wrote Gitanjali?"


@pytest.mark.asyncio
async def test_database_unknown_table(client):
    response = await client.get("/api/v1/database/audit_logs")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_database_export(client, test_db_session):
    response = await client.get("/api/v1/database/payments/export")
    assert response.status_code == 400
    assert response.json()["detail"] == "No data to export"

    test_db_session.add(make_question())
    await test_db_session.commit()

    response = await client.get("/api/v1/database/questions/export")
    assert response.status_code == 200
    assert 'filename="questions-' in response.headers["content-disposition"]
    assert "What is 2 + 2?" in response.text


@pytest.mark.asyncio
async def test_database_delete_row(client, test_db_session):
    question = make_question()
    test_db_session.add(question)
    await test_db_session.commit()

    response = await client.delete(f"/api/v1/database/questions/{question.id}")
    assert response.status_code == 204

    response = await client.delete(f"/api/v1/database/questions/{question.id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_template_create_and_duplicate(client):
    payload = {
        "title": "30-Day CGL Plan",
        "tasks": [{"title": "Percentages"}, {"title": "Syllogism", "subject": "Reasoning"}],
    }
    response = await client.post("/api/v1/templates", json=payload)
    assert response.status_code == 201
    template = response.json()
    assert template["tasks"][0]["subject"] == "General"

    response = await client.post(f"/api/v1/templates/{template['id']}/duplicate")
    assert response.status_code == 201
    copy = response.json()
    assert copy["title"] == "30-Day CGL Plan (Copy)"
    assert copy["tasks"] == template["tasks"]
    assert copy["id"] != template["id"]


@pytest.mark.asyncio
async def test_template_requires_task(client):
    response = await client.post("/api/v1/templates", json={"title": "Empty", "tasks": []})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_send_notification(client):
    response = await client.post(
        "/api/v1/notifications", json={"title": "New mock test", "message": "CGL Mock 5 is live"}
    )
    assert response.status_code == 201
    assert response.json()["type"] == "info"
    assert response.json()["target_audience"] == "all"

    response = await client.get("/api/v1/notifications")
    assert response.json()["total"] == 1

    response = await client.post(
        "/api/v1/notifications", json={"title": "x", "message": "y", "type": "urgent"}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_audit_logs_listing(client, test_db_session, admin_user):
    await client.post("/api/v1/notifications", json={"title": "Hello", "message": "World"})
    await client.post("/api/v1/templates", json={"title": "Plan", "tasks": [{"title": "Task"}]})

    response = await client.get("/api/v1/logs")
    data = response.json()
    assert data["total"] == 2
    assert data["page_size"] == 50

    response = await client.get("/api/v1/logs", params={"search": "templates"})
    logs = response.json()["logs"]
    assert [log["action"] for log in logs] == ["templates.create"]


@pytest.mark.asyncio
async def test_audit_failure_does_not_fail_request(client, test_db_session):
    with patch(
        "app.services.audit_service.audit_log_crud.create_audit_log",
        new_callable=AsyncMock,
        side_effect=RuntimeError("audit table missing"),
    ):
        response = await client.post(
            "/api/v1/notifications", json={"title": "Still sent", "message": "ok"}
        )

    assert response.status_code == 201
    assert response.json()["title"] == "Still sent"
    assert (await test_db_session.execute(select(AuditLog))).scalars().all() == []


@pytest.mark.asyncio
async def test_unknown_record_returns_404(client):
    response = await client.delete(f"/api/v1/news/{uuid.uuid4()}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_template_update_rejects_null_tasks(client):
    created = (await client.post("/api/v1/templates", json={"title": "Plan", "tasks": [{"title": "Task"}]})).json()

    response = await client.patch(f"/api/v1/templates/{created['id']}", json={"tasks": None})
    assert response.status_code == 422
