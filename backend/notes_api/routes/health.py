"""
Notes API - Health Check Route
===============================

What:  Liveness endpoint that also proves the store answers queries.
How:   Runs SELECT 1 on the shared engine and reports the database path.

Responses:
    200 {"ok": true, "db": "/abs/path/myapp.db", "version": ..., "uptime_seconds": ...}
    500 {"ok": false, "error": "<driver message>"}
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from notes_api import __version__
from notes_api import database
from notes_api.config import settings
from notes_api.schemas.note import HealthErrorResponse, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={500: {"description": "Store unreachable", "model": HealthErrorResponse}},
    summary="Service health check",
)
async def health_check():
    """Reports ok=true only when the store executed SELECT 1 and returned 1."""
    try:
        async with database.engine.connect() as conn:
            value = (await conn.execute(text("SELECT 1 AS ok"))).scalar()
    except SQLAlchemyError as e:
        error = str(getattr(e, "orig", None) or e)
        logger.warning("Health check: database unreachable: %s", error)
        return JSONResponse(
            status_code=500,
            content=HealthErrorResponse(ok=False, error=error).model_dump(),
        )

    return HealthResponse(
        ok=value == 1,
        db=settings.sqlite_db,
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
