"""
Taskie Backend - Health Check Route
=====================================

What:  Liveness/readiness probe for load balancers and Docker.
How:   Runs SELECT 1 against the database and reports uptime.

Status levels:
    healthy    database reachable (HTTP 200)
    unhealthy  database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from taskie import __version__
from taskie.database import engine
from taskie.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
    summary="Service health check",
)
async def health_check():
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if overall != "healthy":
        return JSONResponse(status_code=503, content=body.model_dump(by_alias=True))
    return body
