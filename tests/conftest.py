"""Pytest configuration and shared fixtures."""

import logging
from collections.abc import AsyncIterator, Callable

import pytest
from fastapi.testclient import TestClient

from agenda.core import db_client
from agenda.core.config import constants, settings
from agenda.domain.user import UserRole
from agenda.interface.session import serializer
from agenda.main import app
from agenda.scheduling.snapshot import Session


logger = logging.getLogger(__name__)


@pytest.fixture
def test_client() -> TestClient:
    """FastAPI test client (lifespan not started; tests patch the database)."""
    return TestClient(app)


@pytest.fixture
def session_cookie() -> Callable[[str, UserRole], dict[str, str]]:
    """Build a signed session cookie jar for a user id and role."""

    def _cookie(user_id: str, role: UserRole = UserRole.USER) -> dict[str, str]:
        token = serializer.dumps(Session(user_id=user_id, role=role).model_dump(mode="json"))
        return {constants.SESSION_COOKIE_NAME: token}

    return _cookie


@pytest.fixture
def owner_session() -> Session:
    return Session(user_id="user-owner", role=UserRole.OWNER)


@pytest.fixture
def admin_session() -> Session:
    return Session(user_id="user-admin", role=UserRole.ADMIN)


@pytest.fixture
def member_session() -> Session:
    return Session(user_id="user-member", role=UserRole.USER)


@pytest.fixture
async def sqlite_db(tmp_path, monkeypatch) -> AsyncIterator[str]:
    """Point the db client at a fresh SQLite file and create the schema."""
    db_path = str(tmp_path / "agenda-test.db")
    monkeypatch.setattr(settings, "sqlite_db_path", db_path)
    await db_client.init_db()
    yield db_path
    await db_client.close_connection()
