"""Jackut API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map JackutError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - State restored from the snapshot on startup and saved on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - A corrupt snapshot is logged and the system starts empty rather than refusing to boot
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jackut.api.dependencies import get_service, init_service
from jackut.api.error_handlers import register_error_handlers
from jackut.api.routes import (
    communities, health, messages, relationships, sessions, system, users,
)
from jackut.config import get_settings
from jackut.core.errors import SnapshotError
from jackut.infrastructure.database import init_db
from jackut.infrastructure.observability import setup_logging
from jackut.infrastructure.snapshot_store import SnapshotStore
from jackut.services.jackut_service import JackutService

logger = logging.getLogger(__name__)


async def _restore_service(store: SnapshotStore, load: bool, system_sender: str) -> JackutService:
    data = await store.load() if load else None
    try:
        return JackutService.from_snapshot(data, system_sender=system_sender)
    except SnapshotError as e:
        logger.error(f"Ignoring stored snapshot: {e.message}")
        return JackutService(system_sender=system_sender)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(settings.database_url)
    await manager.create_schema()
    store = SnapshotStore(manager)
    service = await _restore_service(
        store, settings.load_snapshot_on_startup, settings.system_sender,
    )
    init_service(service, store)
    logger.info("Jackut API started")
    yield
    if settings.save_snapshot_on_shutdown:
        await store.save(get_service().snapshot())
    await manager.dispose()
    logger.info("Jackut API shut down")


app = FastAPI(title="Jackut API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(sessions.router)
app.include_router(relationships.router)
app.include_router(messages.router)
app.include_router(communities.router)
app.include_router(system.router)

register_error_handlers(app)
