"""Structured Logging — one JSON object per log line.

Invariants:
    - Every line carries timestamp, level, logger and message
    - Lending context passed through `extra=` (book_id, rental_id, user_id) and
      the error handler's error_code/path become top-level keys; other extras
      are dropped so borrower or credential data cannot leak by accident
    - LOG_FORMAT=text switches to a plain formatter for local runs and tests

Design Decisions:
    - stdlib logging with a custom Formatter: no extra dependency
    - setup_logging is called once from the app lifespan
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = ("error_code", "path", "book_id", "rental_id", "user_id")
HANDLER_NAME = "biblioteca"


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON object, stamped with the time it was logged."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Install the service's root handler. Calling it again replaces it."""
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    for existing in list(logging.root.handlers):
        if existing.get_name() == HANDLER_NAME:
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
