"""
CourseDesk Backend — Database Connection Management
=====================================================

What:  The `Database` object owning the async SQLAlchemy engine and session
       factory, plus the FastAPI dependencies that hand sessions to routes.
Why:   One place decides when the process connects, how a failed connection
       is reported, and how sessions are scoped to requests.
How:   `Database.connect()` runs a single initialization task (engine creation,
       connectivity check, table creation). Concurrent callers await the same
       task; its outcome is memoized for the life of the process.
Who:   Constructed by main.create_app() and stored on app.state.database.
When:  Connected lazily on the first request, or in the lifespan when
       DATABASE_CONNECT_ON_STARTUP is set.

Connection states:
    uninitialized ──connect()──▶ connecting ──▶ ready
                                     │
                                     └────────▶ failed (terminal until restart)

Session Strategy:
    Session-per-request. Services commit their own writes before returning,
    so a failed commit reaches the client on the same request; FastAPI runs
    the exit code of a yield dependency after the response is sent. On exit
    the session commits anything still pending and rolls back if the
    handler raised.
"""

import asyncio
import enum
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Depends, Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from coursedesk.config import Settings
from coursedesk.exceptions import DatabaseUnavailableError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models register with this metadata; Database.connect() creates the
    tables from it.
    """
    pass


class ConnectionState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"


def _engine_options(
    url: str,
    pool_size: int,
    max_overflow: int,
    pool_pre_ping: bool,
    echo: bool,
) -> Dict[str, Any]:
    """Keyword arguments for create_async_engine; SQLite pools take no sizing."""
    options: Dict[str, Any] = {"echo": echo, "pool_pre_ping": pool_pre_ping}
    if not make_url(url).get_backend_name().startswith("sqlite"):
        options.update(
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_recycle=3600,
        )
    return options


class Database:
    """
    Owns the engine, the session factory and the one-time connection attempt.

    Attributes:
        url:    SQLAlchemy URL the engine is created from
        state:  Current ConnectionState
        engine: The AsyncEngine once connect() has started, else None

    The object is created unconnected; nothing touches the network until
    connect() is awaited.
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        self.state = ConnectionState.UNINITIALIZED
        self.engine: Optional[AsyncEngine] = None
        self._engine_options = _engine_options(
            url, pool_size, max_overflow, pool_pre_ping, echo
        )
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._connect_task: Optional[asyncio.Task] = None
        self._failure: Optional[BaseException] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @property
    def is_ready(self) -> bool:
        return self.state is ConnectionState.READY

    async def connect(self) -> None:
        """
        Ensure the database is connected.

        Returns immediately when ready. While an attempt is in flight, every
        caller awaits that same attempt. The attempt is shielded so a
        cancelled request does not abort it for the others.

        Raises:
            DatabaseUnavailableError: the attempt failed, now or earlier.
        """
        if self.state is ConnectionState.READY:
            return
        if self.state is ConnectionState.FAILED:
            raise DatabaseUnavailableError(
                context={"cause": type(self._failure).__name__}
            )

        if self._connect_task is None:
            self.state = ConnectionState.CONNECTING
            self._connect_task = asyncio.ensure_future(self._initialize())

        await asyncio.shield(self._connect_task)

    async def _initialize(self) -> None:
        # Register the tables on Base.metadata before create_all
        from coursedesk.models import course, student  # noqa: F401

        logger.info("Connecting to database (%s)", self._safe_url())
        try:
            self.engine = create_async_engine(self.url, **self._engine_options)
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception as exc:
            self._failure = exc
            self.state = ConnectionState.FAILED
            logger.error("Database connection failed: %s", exc, exc_info=True)
            if self.engine is not None:
                await self.engine.dispose()
            raise DatabaseUnavailableError(
                context={"cause": type(exc).__name__}
            ) from exc

        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self.state = ConnectionState.READY
        logger.info("Database connection ready")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield a session that commits on success and rolls back on error.

        Connects first if needed, so a session is never handed out before
        the tables exist.
        """
        await self.connect()
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        """Close all pooled connections. Safe to call when never connected."""
        if self.engine is not None:
            await self.engine.dispose()
            logger.info("Database engine disposed")

    def _safe_url(self) -> str:
        return make_url(self.url).render_as_string(hide_password=True)


# ── FastAPI Dependencies ──────────────────────────────────────────────────

def get_database(request: Request) -> Database:
    """The Database instance the app was created with."""
    return request.app.state.database


async def get_db_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Example usage in a route:
        @router.get("/courses")
        async def list_courses(db: AsyncSession = Depends(get_db_session)):
            ...

    Raises:
        DatabaseUnavailableError: propagated to the global handler (HTTP 500).
    """
    async with database.session() as session:
        yield session
