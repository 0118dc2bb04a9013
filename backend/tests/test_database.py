"""
CourseDesk Backend — Database Connection Tests
================================================

What:  Tests for the Database object's one-time connection behavior.

What we test:
    ✅ connect() creates the tables and reaches the ready state
    ✅ Concurrent connect() calls share one initialization
    ✅ A failed connection is reported to every caller and never retried
    ✅ Sessions commit on success and roll back on error
    ✅ Pool sizing is only passed to non-SQLite engines
    ✅ Timestamps read back from SQLite are UTC-aware
"""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import create_async_engine

from coursedesk.database import ConnectionState, Database, _engine_options
from coursedesk.exceptions import DatabaseUnavailableError
from coursedesk.models.columns import UTCDateTime, as_utc
from coursedesk.models.course import Course


class TestConnect:

    @pytest.mark.asyncio
    async def test_new_database_is_uninitialized(self, database):
        assert database.state is ConnectionState.UNINITIALIZED
        assert database.engine is None

    @pytest.mark.asyncio
    async def test_connect_creates_tables(self, database):
        await database.connect()

        assert database.is_ready
        async with database.session() as session:
            result = await session.execute(select(func.count()).select_from(Course))
            assert result.scalar() == 0

    @pytest.mark.asyncio
    async def test_connect_twice_initializes_once(self, database):
        with patch(
            "coursedesk.database.create_async_engine", wraps=create_async_engine
        ) as engine_factory:
            await database.connect()
            await database.connect()

        assert engine_factory.call_count == 1

    @pytest.mark.asyncio
    async def test_concurrent_connects_share_one_attempt(self, database):
        with patch(
            "coursedesk.database.create_async_engine", wraps=create_async_engine
        ) as engine_factory:
            await asyncio.gather(*(database.connect() for _ in range(10)))

        assert engine_factory.call_count == 1
        assert database.state is ConnectionState.READY


class TestConnectFailure:

    @pytest.mark.asyncio
    async def test_failed_connect_raises_unavailable(self, unreachable_database):
        with pytest.raises(DatabaseUnavailableError):
            await unreachable_database.connect()

        assert unreachable_database.state is ConnectionState.FAILED

    @pytest.mark.asyncio
    async def test_failure_is_not_retried(self, unreachable_database):
        with patch(
            "coursedesk.database.create_async_engine", wraps=create_async_engine
        ) as engine_factory:
            for _ in range(3):
                with pytest.raises(DatabaseUnavailableError):
                    await unreachable_database.connect()

        assert engine_factory.call_count == 1

    @pytest.mark.asyncio
    async def test_concurrent_callers_all_see_failure(self, unreachable_database):
        results = await asyncio.gather(
            *(unreachable_database.connect() for _ in range(5)),
            return_exceptions=True,
        )

        assert all(isinstance(r, DatabaseUnavailableError) for r in results)

    @pytest.mark.asyncio
    async def test_session_unavailable_after_failure(self, unreachable_database):
        with pytest.raises(DatabaseUnavailableError):
            async with unreachable_database.session():
                pass


class TestSession:

    @pytest.mark.asyncio
    async def test_session_commits_on_success(self, database):
        async with database.session() as session:
            session.add(Course(name="Physics", duration=3))

        async with database.session() as session:
            result = await session.execute(select(Course.name))
            assert result.scalars().all() == ["Physics"]

    @pytest.mark.asyncio
    async def test_session_rolls_back_on_error(self, database):
        with pytest.raises(RuntimeError):
            async with database.session() as session:
                session.add(Course(name="Chemistry", duration=3))
                await session.flush()
                raise RuntimeError("handler failed")

        async with database.session() as session:
            result = await session.execute(select(func.count()).select_from(Course))
            assert result.scalar() == 0

    @pytest.mark.asyncio
    async def test_dispose_without_connect_is_safe(self):
        db = Database("sqlite+aiosqlite:///:memory:")
        await db.dispose()
        assert db.state is ConnectionState.UNINITIALIZED


class TestEngineOptions:

    def test_sqlite_has_no_pool_sizing(self):
        options = _engine_options("sqlite+aiosqlite:///x.db", 10, 5, True, False)
        assert "pool_size" not in options
        assert options["pool_pre_ping"] is True

    def test_postgres_gets_pool_sizing(self):
        options = _engine_options(
            "postgresql+asyncpg://u:p@localhost/db", 10, 5, True, False
        )
        assert options["pool_size"] == 10
        assert options["max_overflow"] == 5
        assert options["pool_recycle"] == 3600


class TestUTCDateTime:

    def test_naive_value_is_taken_as_utc(self):
        loaded = UTCDateTime().process_result_value(datetime(2024, 9, 1, 12, 0), None)

        assert loaded == datetime(2024, 9, 1, 12, 0, tzinfo=timezone.utc)
        assert loaded.tzinfo is timezone.utc

    def test_offset_value_is_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))

        bound = as_utc(datetime(2024, 9, 1, 14, 0, tzinfo=plus_two))

        assert bound == datetime(2024, 9, 1, 12, 0, tzinfo=timezone.utc)
        assert bound.tzinfo is timezone.utc

    def test_none_passes_through(self):
        assert UTCDateTime().process_bind_param(None, None) is None

    @pytest.mark.asyncio
    async def test_sqlite_round_trip_keeps_utc(self, database):
        async with database.session() as session:
            session.add(Course(name="Maths", duration=5))

        async with database.session() as session:
            course = (await session.execute(select(Course))).scalar_one()

        assert course.created_at.tzinfo is timezone.utc
