"""API test fixtures — isolated app per test + async HTTP client.

Invariants:
    - Every test gets its own create_app() instance (fresh store, ids from 1)

Design Decisions:
    - httpx ASGITransport: exercises routing, schemas and error handlers in-process
"""

import pytest
from httpx import ASGITransport, AsyncClient

from habit_tracker.main import create_app


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def habit_service(app):
    """Direct handle on the app's service for seeding state."""
    return app.state.habit_service
