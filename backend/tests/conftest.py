"""
CourseDesk Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── sample_course / sample_student: fully populated ORM instances
    ├── database: Database backed by a fresh SQLite file under tmp_path
    ├── test_client: HTTPX AsyncClient against an app using `database`
    └── unreachable_client: HTTPX AsyncClient against an app whose database
                            can never connect
"""

import os
import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Set before any coursedesk import so the module-level settings pick them up
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./coursedesk_test.db"
os.environ["DATABASE_CONNECT_ON_STARTUP"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from coursedesk.config import Settings
from coursedesk.database import Database
from coursedesk.main import create_app
from coursedesk.models.course import Course
from coursedesk.models.student import Student

# sqlite cannot create a file inside a directory that does not exist
UNREACHABLE_DATABASE_URL = "sqlite+aiosqlite:////nonexistent-coursedesk-dir/sub/test.db"


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get(mock_db_session, sample_course):
            mock_db_session.get.return_value = sample_course
            result = await course_service.get(mock_db_session, str(sample_course.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_course():
    now = datetime.now(timezone.utc)
    return Course(
        id=uuid.uuid4(),
        name="Maths",
        description="Algebra and calculus",
        duration=5,
        status="active",
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def sample_student():
    now = datetime.now(timezone.utc)
    return Student(
        id=uuid.uuid4(),
        name="Asha Rao",
        email="asha@example.com",
        course="Maths",
        enrollment_date=now,
        status="active",
        created_at=now,
        updated_at=now,
    )


@pytest_asyncio.fixture
async def database(tmp_path):
    """A Database on its own SQLite file; tables are created on first connect."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'coursedesk.db'}")
    yield db
    await db.dispose()


def _make_client(database: Database, **transport_kwargs) -> AsyncClient:
    app = create_app(settings=Settings(database_url=database.url), database=database)
    transport = ASGITransport(app=app, **transport_kwargs)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient talking to a fresh app instance.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    async with _make_client(database) as client:
        yield client


@pytest_asyncio.fixture
async def unreachable_database():
    db = Database(UNREACHABLE_DATABASE_URL)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def unreachable_client(unreachable_database):
    async with _make_client(unreachable_database) as client:
        yield client
