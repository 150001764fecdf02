"""Structured Logging — JSON log lines keyed by rental, customer and staff ids.

Invariants:
    - Every line has timestamp, level, logger and message
    - Entity ids passed via `extra=` (rental_id, customer_id, ...) become top-level
      keys, so one rental can be followed across lifecycle, billing and error logs
    - setup_logging is idempotent: calling it again replaces its own handler

Design Decisions:
    - JSONFormatter on stdlib logging, no extra dependency
    - UUID and Decimal extras are rendered with str(): ids and amounts stay exact
"""

import logging
import json
from datetime import datetime, timezone

ENTITY_KEYS = (
    "rental_id", "customer_id", "staff_id", "inventory_id", "payment_id",
    "film_id", "store_id",
)
REQUEST_KEYS = ("error_code", "path")

_HANDLER_NAME = "filmrental"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, entity ids first-class."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ENTITY_KEYS + REQUEST_KEYS:
            val = getattr(record, key, None)
            if val is not None:
                log[key] = str(val)
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the app's root handler, replacing one left by an earlier call."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
