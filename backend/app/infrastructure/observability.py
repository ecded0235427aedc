"""Logging Setup — one JSON object per line for board, absence and inbox events.

Invariants:
    - Every line carries timestamp (UTC), level, logger and message
    - Only whitelisted `extra=` keys are emitted, and only when not None
    - setup_logging replaces root handlers, so calling it twice never
      duplicates lines

Design Decisions:
    - Stdlib logging.Formatter subclass; routes log through
      logging.getLogger(__name__) with ids passed in `extra=`
    - fmt="text" for local runs, anything else falls back to JSON
"""

import json
import logging
from datetime import datetime, timezone

LOGGED_EXTRAS = (
    "user_id", "requester_id", "project_id", "task_id", "subtask_id",
    "recipients", "all", "error_code", "path",
)

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in LOGGED_EXTRAS:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install a single stream handler on the root logger."""
    handler = logging.StreamHandler()
    if fmt == "text":
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    else:
        handler.setFormatter(JSONFormatter())
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
