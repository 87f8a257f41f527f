"""
Rentomatic Backend - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware, routes, repository wiring and
       lifecycle management in one place.
How:   Factory pattern: create_app(settings) returns a configured FastAPI app.
Who:   gunicorn/uvicorn import `rentomatic.main:app`; tests call create_app().

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:      GET /rooms        GET /health         │
    │                                                     │
    │  app.state:   settings, engine (sql only),          │
    │               room_repository (memory | sql)        │
    │                                                     │
    │  Exception handlers: safety net → 500               │
    └─────────────────────────────────────────────────────┘

Production: gunicorn -w 4 -k uvicorn.workers.UvicornWorker rentomatic.main:app
Every worker builds its own app, engine and pool.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rentomatic import __version__
from rentomatic.config import Settings, get_settings
from rentomatic.database import (
    create_engine_from_settings,
    create_session_factory,
    dispose_engine,
)
from rentomatic.exceptions import RentomaticError
from rentomatic.logging_setup import setup_logging
from rentomatic.middleware.logging import RequestLoggingMiddleware
from rentomatic.middleware.request_id import RequestIDMiddleware, request_id_var
from rentomatic.repository.base import RoomRepository
from rentomatic.repository.memory import MemRoomRepository
from rentomatic.repository.sql import SqlRoomRepository
from rentomatic.routes import health, rooms

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging, log the effective configuration.
    Shutdown: dispose the SQL engine (close all pooled connections).
    """
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)

    logger.info("Rentomatic %s starting (config=%s, repository=%s)",
                __version__, settings.app_config, settings.repository_backend)
    if settings.repository_backend == "sql":
        logger.info(
            "Room store: postgres://%s@%s:%d/%s",
            settings.postgres_user,
            settings.postgres_hostname,
            settings.postgres_port,
            settings.application_db,
        )

    yield

    logger.info("Rentomatic shutting down...")
    engine = getattr(app.state, "engine", None)
    if engine is not None:
        await dispose_engine(engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Safety net for errors raised outside a use case.

    Use cases already turn storage failures into system_error envelopes, so
    these only fire for bugs in routes, middleware or dependencies. They never
    expose stack traces; details are logged server-side.
    """

    @app.exception_handler(RentomaticError)
    async def handle_rentomatic_error(request: Request, exc: RentomaticError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "system_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "system_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Repository Wiring
# ══════════════════════════════════════════════════════════════════════════

def build_room_repository(app: FastAPI, settings: Settings) -> RoomRepository:
    """
    Build the repository selected by REPOSITORY_BACKEND.

    memory: seeded from ROOMS_FILE when set, empty otherwise
    sql:    one engine per app (stored on app.state for /health and shutdown)
    """
    if settings.repository_backend == "memory":
        if settings.rooms_file:
            return MemRoomRepository.from_json_file(settings.rooms_file)
        return MemRoomRepository()

    engine = create_engine_from_settings(settings)
    app.state.engine = engine
    return SqlRoomRepository(create_session_factory(engine))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    room_repository: Optional[RoomRepository] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit configuration; defaults to get_settings().
        room_repository: Use this repository instead of building one from
                         settings (tests, embedding).
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Rentomatic API",
        description="Lists rentable rooms, filtered by size, price, code and location.",
        version=__version__,
        # No interactive docs in production
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        openapi_url=None if settings.is_production else "/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = None
    app.state.room_repository = room_repository or build_room_repository(app, settings)

    # Last added = first to execute: Request ID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(rooms.router)
    app.include_router(health.router)

    return app


# uvicorn/gunicorn expect `rentomatic.main:app`
app = create_app()
