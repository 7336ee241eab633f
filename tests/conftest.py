"""공통 테스트 픽스처 (인메모리 SQLite + ASGI 클라이언트)"""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.security import get_current_admin
from app.main import app
from app.models import Base, Question, Test, User
from app.models.base import get_db


@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(test_engine):
    return async_sessionmaker(test_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_db_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def admin_user(test_db_session):
    admin = User(email="admin@sscexamhub.com", name="관리자", plan="admin")
    test_db_session.add(admin)
    await test_db_session.commit()
    await test_db_session.refresh(admin)
    return admin


@pytest_asyncio.fixture
async def sample_test(test_db_session):
    test = Test(title="SSC CGL Mock 1", slug="ssc-cgl-mock-1", test_type="mock")
    test_db_session.add(test)
    await test_db_session.commit()
    await test_db_session.refresh(test)
    return test


def make_question(**overrides) -> Question:
    data = {
        "question_text": "What is 2 + 2?",
        "option_a": "3",
        "option_b": "4",
        "option_c": "5",
        "option_d": "6",
        "correct_answer": "b",
        "subject": "Maths",
        "difficulty": "easy",
    }
    data.update(overrides)
    return Question(**data)


def _override_get_db(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            yield session
    return override_get_db


@pytest_asyncio.fixture
async def client(session_maker, admin_user):
    """관리자 인증을 통과한 상태의 클라이언트"""
    app.dependency_overrides[get_db] = _override_get_db(session_maker)
    app.dependency_overrides[get_current_admin] = lambda: admin_user
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def anonymous_client(session_maker):
    """관리자 인증을 실제로 거치는 클라이언트"""
    app.dependency_overrides[get_db] = _override_get_db(session_maker)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
