"""
Student API - Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the whole suite.
How:   Two kinds of backends are provided:

    mock_gateway    → AsyncMock standing in for DatabaseGateway (unit tests)
    sqlite_gateway  → real DatabaseGateway on an on-disk aiosqlite database
                      with the mst_student table created (endpoint tests)

    mock_client / test_client wrap an app built around each gateway in an
    HTTPX AsyncClient using ASGITransport (no server, no lifespan).
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Settings are read at import time; keep tests off any real database
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_students.db"
os.environ["LOG_LEVEL"] = "WARNING"

from student_api.database import Base, DatabaseGateway  # noqa: E402
from student_api.main import create_app  # noqa: E402
from student_api.models.student import StudentRecord  # noqa: E402,F401


@pytest.fixture
def sample_student_payload():
    """JSON body for POST /students."""
    return {
        "id": 1,
        "name": "Ann",
        "email": "a@x.com",
        "address": "1 Main St",
        "birth_date": "2000-01-01T00:00:00Z",
        "gender": "F",
    }


@pytest.fixture
def sample_student_row():
    """A positional mst_student row as the gateway returns it."""
    return (
        1,
        "Ann",
        "a@x.com",
        "1 Main St",
        datetime(2000, 1, 1, tzinfo=timezone.utc),
        "F",
    )


@pytest.fixture
def mock_gateway():
    """
    A DatabaseGateway double.

    Usage:
        mock_gateway.fetch_one.return_value = sample_student_row
        mock_gateway.execute.side_effect = DatabaseError("boom")
    """
    gateway = AsyncMock(spec=DatabaseGateway)
    gateway.fetch_all.return_value = []
    gateway.fetch_one.return_value = None
    gateway.execute.return_value = 1
    return gateway


@pytest_asyncio.fixture
async def sqlite_gateway(tmp_path):
    """A connected gateway on a fresh SQLite file holding an empty mst_student table."""
    gateway = DatabaseGateway(f"sqlite+aiosqlite:///{tmp_path / 'students.db'}")
    async with gateway.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await gateway.connect()
    yield gateway
    await gateway.dispose()


@pytest_asyncio.fixture
async def mock_client(mock_gateway):
    app = create_app(gateway=mock_gateway)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def test_client(sqlite_gateway):
    """
    HTTP client for an app backed by the SQLite gateway.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/students")
            assert response.status_code == 200
    """
    app = create_app(gateway=sqlite_gateway)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
