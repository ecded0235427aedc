"""Health — process liveness and database readiness for the Teamboard API.

Invariants:
    - /health/ answers 200 while the process serves requests; it touches no I/O
    - /health/ready answers 503 until init_db has run and SELECT 1 succeeds
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from app.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness(request: Request):
    return {
        "status": "healthy",
        "service": "teamboard-api",
        "version": request.app.version,
    }


@router.get("/ready")
async def readiness():
    """Board data lives in one database: no database, no service."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        logger.warning("Readiness check failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
