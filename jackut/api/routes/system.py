"""System Routes — full reset and on-demand snapshot persistence.

Invariants:
    - POST /system/reset clears users, sessions, communities, relations and inboxes
    - POST /system/save writes the current snapshot; 503 when no store is configured
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from jackut.api.dependencies import get_service, get_snapshot_store
from jackut.infrastructure.snapshot_store import SnapshotStore
from jackut.services.jackut_service import JackutService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/system", tags=["system"])


@router.post("/reset")
def reset_system(service: JackutService = Depends(get_service)):
    service.reset()
    return {"status": "reset"}


@router.post("/save")
async def save_system(
    service: JackutService = Depends(get_service),
    store: SnapshotStore | None = Depends(get_snapshot_store),
):
    if store is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "reason": "snapshot_store_missing"},
        )
    snapshot = service.snapshot()
    await store.save(snapshot)
    return {"status": "saved", "users": len(snapshot["users"])}
