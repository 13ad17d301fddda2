"""Log handler setup for the ``restful`` logger tree.

Only the ``restful`` logger is configured, so an application embedding the
helpers keeps its own root logging. create_app calls setup_logging when
``Config.configure_logging`` is set.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from restful.config import Config

LOGGER_NAME = "restful"

# Attributes the access log attaches to its records
REQUEST_FIELDS = ("method", "path", "status", "duration_ms", "outcome")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, request fields as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created,
                tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in REQUEST_FIELDS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)
        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def setup_logging(config: Config) -> logging.Logger:
    """Give the ``restful`` logger its own stdout handler.

    Repeated calls replace the handler instead of stacking another one.
    Records stop propagating to the root logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    if config.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
    return logger
