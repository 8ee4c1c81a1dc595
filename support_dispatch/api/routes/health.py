"""
Health check endpoint
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from support_dispatch.api.models import HealthResponse


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Service and database status.

    Returns 200 when the database answers, 503 otherwise.
    """
    health = HealthResponse(
        status="ok",
        uptime=round(time.monotonic() - request.app.state.started_at, 3),
        timestamp=datetime.now(timezone.utc).isoformat(),
        database="connected",
    )

    try:
        await request.app.state.store.ping()
    except Exception as e:
        logger.error(f"Health check: database unreachable: {e}")
        health.status = "degraded"
        health.database = "disconnected"
        health.error = str(e) or "Unknown database error"

    code = 200 if health.status == "ok" else 503
    return JSONResponse(status_code=code, content=health.model_dump(by_alias=True, exclude_none=True))
