"""
CourseDesk Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, exception
       mapping and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
       The Database object is constructed here (or passed in) and handed to
       the routing layer through app.state; nothing reads a global engine.
Who:   Called by uvicorn (uvicorn coursedesk.main:app) and by the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────┐ ┌──────┐ ┌──────┐         │
    │  │  Req ID  │→│ Logging │→│ GZip │→│ CORS │         │
    │  └──────────┘ └─────────┘ └──────┘ └──────┘         │
    │                                                     │
    │  Routes:                                            │
    │  /api/courses  /api/students  /api/dashboard/stats  │
    │  /health                                            │
    │                                                     │
    │  Exception Handlers:                                │
    │  Body/Conflict→400 │ NotFound→404 │ DB→500          │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect to the database if DATABASE_CONNECT_ON_STARTUP is set
       (a failure aborts startup and the process exits)

    Shutdown:
    1. Dispose the database engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from coursedesk import __version__
from coursedesk.config import Settings, settings as default_settings
from coursedesk.database import Database
from coursedesk.exceptions import (
    ConflictError,
    DatabaseError,
    DatabaseUnavailableError,
    NotFoundError,
)
from coursedesk.middleware.logging import RequestLoggingMiddleware
from coursedesk.middleware.request_id import RequestIDMiddleware, request_id_var
from coursedesk.routes import courses, dashboard, health, students

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout so
    container and serverless platforms capture it.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, then an eager database connection when configured.
    Shutdown: dispose the engine.

    With eager connection, DatabaseUnavailableError escapes the lifespan;
    uvicorn reports the startup failure and exits.
    """
    app_settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(app_settings.log_level)
    logger.info("CourseDesk Backend %s starting up...", __version__)

    if app_settings.database_connect_on_startup:
        await database.connect()
    else:
        logger.info("Database connection deferred to the first request")

    logger.info(
        "Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port
    )

    yield

    logger.info("CourseDesk Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, error: str, message: str, details=None, headers=None):
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "details": details,
            "request_id": request_id_var.get(""),
        },
        headers=headers,
    )


def _outer_middleware_headers(request: Request) -> dict:
    """
    Headers the CORS and RequestID middleware would have added.

    The catch-all handler runs in ServerErrorMiddleware, outside both, so a
    500 from an unexpected error would otherwise reach the browser without
    them and its body could not be read cross-origin.
    """
    headers = {}
    rid = getattr(request.state, "request_id", "") or request_id_var.get("")
    if rid:
        headers["X-Request-ID"] = rid

    origin = request.headers.get("origin")
    app_settings: Settings = request.app.state.settings
    if origin and app_settings.cors_allows_any_origin:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin and origin in app_settings.cors_origins_list:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Access-Control-Allow-Credentials"] = "true"
        headers["Vary"] = "Origin"
    if "Access-Control-Allow-Origin" in headers:
        headers["Access-Control-Expose-Headers"] = "X-Request-ID"
    return headers


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        RequestValidationError   → 400 (body failed schema validation)
        ConflictError            → 400 (unique field already taken)
        NotFoundError            → 404
        HTTPException            → its own status (unmatched route → 404)
        DatabaseUnavailableError → 500 (connection failed)
        DatabaseError            → 500
        Exception (fallback)     → 500

    Exception handlers never expose stack traces or SQL in the response.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"] if part != "body"),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        logger.warning("[%s] Invalid request body: %s", request_id_var.get(""), errors)
        return _error_response(
            400, "validation_error", "Request body failed validation", {"errors": errors}
        )

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return _error_response(400, "conflict", exc.message, exc.context)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, "not_found", exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return _error_response(
                404,
                "not_found",
                f"Route {request.method} {request.url.path} not found",
                headers=getattr(exc, "headers", None),
            )
        return _error_response(
            exc.status_code, "http_error", str(exc.detail), headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(DatabaseUnavailableError)
    async def handle_database_unavailable(request: Request, exc: DatabaseUnavailableError):
        logger.error("[%s] %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error_response(500, "database_unavailable", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context
        )
        return _error_response(
            500, "server_error", "An internal error occurred. Please try again later."
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=exc
        )
        return _error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
            headers=_outer_middleware_headers(request),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; defaults to the environment-loaded settings.
        database: Connection manager to serve requests with; built from
                  `settings` when omitted. Tests pass their own.
    """
    settings = settings or default_settings
    if database is None:
        database = Database.from_settings(settings)

    app = FastAPI(
        title="CourseDesk API",
        description="Student and course management backend.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        # Browsers reject credentials with a wildcard origin
        allow_credentials=not settings.cors_allows_any_origin,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(courses.router)
    app.include_router(students.router)
    app.include_router(dashboard.router)
    app.include_router(health.router)

    return app


# uvicorn expects `coursedesk.main:app` to be importable
app = create_app()
