"""API Dependencies — service singleton and session token extraction.

Invariants:
    - One JackutService per process, installed by the lifespan before requests
    - The session token is read from the X-Session-Token header and resolved
      by the service, never by routes

Design Decisions:
    - Module-level singleton mirrors db_manager: lifespan owns its lifecycle,
      tests swap it through app.dependency_overrides
"""

from fastapi import Header

from jackut.infrastructure.snapshot_store import SnapshotStore
from jackut.services.jackut_service import JackutService

_service: JackutService | None = None
_store: SnapshotStore | None = None


def init_service(service: JackutService, store: SnapshotStore | None = None) -> None:
    global _service, _store
    _service = service
    _store = store


def get_service() -> JackutService:
    """FastAPI dependency for the dispatch service."""
    if _service is None:
        raise RuntimeError("JackutService not initialized")
    return _service


def get_optional_service() -> JackutService | None:
    """Same as get_service, but None before startup (readiness probe)."""
    return _service


def get_snapshot_store() -> SnapshotStore | None:
    return _store


def get_session_token(
    x_session_token: str | None = Header(default=None),
) -> str:
    return x_session_token or ""
