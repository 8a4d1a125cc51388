"""Health Routes — liveness and readiness checks.

Invariants:
    - /health answers 200 whenever the process can serve requests; no DB access
    - /health/ready answers 503 until a SELECT 1 round-trips
    - Neither endpoint requires authentication or is rate limited
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from mini_notes.infrastructure import database

router = APIRouter(prefix="/health", tags=["health"])

SERVICE_NAME = "mini-notes-api"
SERVICE_VERSION = "1.0.0"


@router.get("")
async def liveness():
    return {"status": "ok", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/ready")
async def readiness():
    # db_manager is looked up per call: it is swapped in by the lifespan hook
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
