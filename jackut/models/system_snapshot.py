"""System Snapshot ORM — the single row holding the serialized system state.

Invariants:
    - At most one row, id = SNAPSHOT_ROW_ID
    - data is the JSON-safe dict produced by services.system_snapshot

Design Decisions:
    - JSON column stores the whole snapshot as-is (one flat file, no per-entity tables)
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from jackut.db.base import Base

SNAPSHOT_ROW_ID = 1


class SystemSnapshot(Base):
    """Persisted system snapshot."""
    __tablename__ = "system_snapshots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
