"""
Rentomatic Backend - Health Check Route
========================================

What:  Health check endpoint for Docker, Nginx upstream checks and monitoring.
How:   With the SQL backend, runs SELECT 1 on the application engine.
       The memory backend has no external dependency to probe.

Status levels:
    - healthy:   store reachable, or nothing to reach (HTTP 200)
    - unhealthy: SQL store unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from rentomatic import __version__
from rentomatic.schemas.room import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Room store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request) -> JSONResponse:
    settings = request.app.state.settings
    engine = getattr(request.app.state, "engine", None)

    db_status = "not_applicable"
    overall = "healthy"

    if engine is not None:
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            db_status = "connected"
        except Exception as e:
            db_status = "disconnected"
            overall = "unhealthy"
            logger.warning("Health check: database unreachable: %s", str(e))

    body = HealthResponse(
        status=overall,
        version=__version__,
        repository=settings.repository_backend,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(
        status_code=200 if overall == "healthy" else 503,
        content=body.model_dump(),
    )
