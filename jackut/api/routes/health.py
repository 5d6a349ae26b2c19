"""Health & Readiness Probes.

Invariants:
    - GET /health/ is 200 whenever the process answers (liveness)
    - GET /health/ready is 503 until both the snapshot database answers and the
      service has been installed by the lifespan; otherwise it reports counters
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from jackut.api.dependencies import get_optional_service
from jackut.services.jackut_service import JackutService
import jackut.infrastructure.database as db_module

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "jackut-api"
SERVICE_VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/ready")
async def readiness(service: JackutService | None = Depends(get_optional_service)):
    manager = db_module.db_manager
    checks = {
        "database": manager is not None and await manager.health_check(),
        "service": service is not None,
    }
    if not all(checks.values()):
        failing = [name for name, ok in checks.items() if not ok]
        logger.warning(f"Not ready: {', '.join(failing)}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "failing": failing},
        )
    return {"status": "ready", "counts": service.stats()}
