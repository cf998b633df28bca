import os

# Settings are read on import of the app modules
os.environ.setdefault("JWT_SECRET", "test-secret-for-the-pr-reviewer-suite")
os.environ.setdefault("LOG_JSON_FORMAT", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./pr_reviewer_app.db")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker

from models.models import Base
from models import database
from main import app
from dependencies import get_reviewer_selector
from services.auth import issue_token
from services.reviewer_selector import ReviewerSelector


def _test_database_url(tmp_path) -> str:
    url = os.getenv("TEST_DATABASE_URL")
    if url:
        return url
    return f"sqlite+aiosqlite:///{tmp_path / 'pr_reviewer_test.db'}"


@pytest.fixture(scope="function")
async def db(tmp_path):
    """Fresh schema per test, services pointed at it."""
    test_engine = create_async_engine(_test_database_url(tmp_path), echo=False)
    original_session_maker = database.async_session_maker
    database.async_session_maker = async_sessionmaker(test_engine, expire_on_commit=False)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield test_engine
    finally:
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await test_engine.dispose()
        database.async_session_maker = original_session_maker


@pytest.fixture
def selector():
    return ReviewerSelector(seed=42)


@pytest.fixture(scope="function")
async def anon_client(db, selector):
    """Client without credentials."""
    app.dependency_overrides[get_reviewer_selector] = lambda: selector
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client(anon_client):
    """Client carrying a valid bearer token."""
    anon_client.headers["Authorization"] = f"Bearer {issue_token('tester', 'qa')}"
    yield anon_client


@pytest.fixture
def make_team(anon_client):
    async def _make_team(team_name, *user_ids, inactive=()):
        response = await anon_client.post("/team/add", json={
            "team_name": team_name,
            "members": [
                {"user_id": uid, "username": f"User {uid}", "is_active": uid not in inactive}
                for uid in user_ids
            ]
        })
        assert response.status_code == 201, response.text
        return response.json()["team"]
    return _make_team
