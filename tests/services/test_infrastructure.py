"""Infrastructure — logging formatter, settings and database error mapping.

Tests cover:
    - JSONFormatter surfaces context fields only when set
    - setup_logging replaces its own handler instead of stacking
    - Settings rewrites plain sqlite:// URLs to the async driver
    - DatabaseSessionManager maps SQLAlchemy failures to DatabaseError
"""

import json
import logging

import pytest
from sqlalchemy import text

from jackut.config import Settings
from jackut.core.errors import DatabaseError
from jackut.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("jackut.test", logging.INFO, __file__, 1, "olá", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


# ─── Logging ─────────────────────────────────────────────────────

def test_json_formatter_includes_set_context_fields():
    line = JSONFormatter().format(_record(user_id="maria", community="rock"))
    entry = json.loads(line)
    assert entry["message"] == "olá"
    assert entry["user_id"] == "maria"
    assert entry["community"] == "rock"
    assert "target_id" not in entry


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    before = len(root.handlers)
    first = setup_logging("DEBUG", "text")
    setup_logging("INFO", "json")
    try:
        assert len(root.handlers) == before + 1
        assert first not in root.handlers
        assert root.level == logging.INFO
    finally:
        for handler in [h for h in root.handlers if h.get_name() == "jackut"]:
            root.removeHandler(handler)


# ─── Settings ────────────────────────────────────────────────────

def test_settings_rewrite_sqlite_url():
    settings = Settings(database_url="sqlite:///./x.db")
    assert settings.database_url == "sqlite+aiosqlite:///./x.db"


def test_settings_keep_async_url():
    url = "postgresql+asyncpg://u:p@db/jackut"
    assert Settings(database_url=url).database_url == url


# ─── Database ────────────────────────────────────────────────────

async def test_bad_sql_becomes_database_error(test_manager):
    with pytest.raises(DatabaseError) as exc:
        async with test_manager.session() as db:
            await db.execute(text("SELECT * FROM no_such_table"))
    assert exc.value.operation == "execute"
    assert exc.value.http_status == 503


async def test_health_check(test_manager):
    assert await test_manager.health_check() is True
