"""Snapshot Store — load/save the single persisted system snapshot.

Invariants:
    - Exactly zero or one snapshot row exists (id = SNAPSHOT_ROW_ID)
    - save() is an upsert; load() returns None when nothing was saved yet
    - Errors surface as DatabaseError through DatabaseSessionManager

Design Decisions:
    - Whole-state snapshot instead of per-entity tables: the core is an
      in-memory engine, persistence only matters across restarts
"""

import logging
from datetime import datetime, timezone

from jackut.core.domain_types import SNAPSHOT_VERSION
from jackut.infrastructure.database import DatabaseSessionManager
from jackut.models.system_snapshot import SNAPSHOT_ROW_ID, SystemSnapshot

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Reads and writes the system snapshot row."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    async def load(self) -> dict | None:
        async with self._manager.session() as db:
            row = await db.get(SystemSnapshot, SNAPSHOT_ROW_ID)
            if row is None:
                logger.info("No stored snapshot, starting empty")
                return None
            return dict(row.data)

    async def save(self, data: dict) -> None:
        async with self._manager.session() as db:
            row = await db.get(SystemSnapshot, SNAPSHOT_ROW_ID)
            if row is None:
                row = SystemSnapshot(id=SNAPSHOT_ROW_ID)
                db.add(row)
            row.version = data.get("version", SNAPSHOT_VERSION)
            row.data = data
            row.updated_at = datetime.now(timezone.utc)
            await db.commit()
        logger.info(f"Snapshot saved ({len(data.get('users', []))} users)")

    async def clear(self) -> None:
        async with self._manager.session() as db:
            row = await db.get(SystemSnapshot, SNAPSHOT_ROW_ID)
            if row is not None:
                await db.delete(row)
                await db.commit()
