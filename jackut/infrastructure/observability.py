"""Structured Logging — one stdlib handler, JSON or text, installed at startup.

Invariants:
    - Every record carries timestamp (of the event, not of formatting), level,
      logger name and message
    - Request context passed via `extra=` (user_id, target_id, community,
      error_code, path) is surfaced only when set
    - setup_logging is idempotent: calling it again replaces its own handler

Design Decisions:
    - JSONFormatter on stdlib logging: no extra dependency, full control over fields
    - ensure_ascii=False: profile values and crush notices are Portuguese text
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_FIELDS = ("user_id", "target_id", "community", "error_code", "path")

_HANDLER_NAME = "jackut"


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            key: getattr(record, key)
            for key in CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the application handler on the root logger."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json"
        else logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
