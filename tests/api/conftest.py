"""API test fixtures — FastAPI test client over an in-memory SQLite store.

Invariants:
    - get_db dependency overridden to use the per-test engine
    - db_manager patched so readiness probes see the test engine
"""

import pytest
from httpx import ASGITransport, AsyncClient

from exercise_tracker.infrastructure.database import get_db, DatabaseSessionManager
import exercise_tracker.infrastructure.database as db_module
from exercise_tracker.main import app


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def alice(client):
    res = await client.post("/api/users", json={"username": "alice"})
    assert res.status_code == 201
    return res.json()
