"""Structured JSON logging configuration."""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict

# Extra fields whose values must never reach a log line
SENSITIVE_KEYS = frozenset({'password', 'password_hash', 'token', 'authorization'})


class JSONFormatter(logging.Formatter):
    """Format log records as JSON, one object per line.

    Fields passed via ``logger.info("msg", extra={...})`` land on the record
    as attributes and are emitted alongside the standard keys.
    """

    _STANDARD_ATTRS = frozenset(
        logging.LogRecord('', 0, '', 0, '', None, None).__dict__
    ) | {'message', 'asctime', 'taskName'}

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in self._STANDARD_ATTRS or callable(value):
                continue
            log_data[key] = "***" if key.lower() in SENSITIVE_KEYS else value

        return json.dumps(log_data, default=str)


def setup_structured_logging(level: str | None = None):
    """Configure structured JSON logging for the application.

    Also routes uvicorn's access logger through the same handler so access
    lines are not emitted twice in different formats.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    root_logger = logging.getLogger()
    root_logger.setLevel(level or os.getenv("LOG_LEVEL", "INFO").upper())
    root_logger.handlers = [handler]

    uvicorn_access = logging.getLogger("uvicorn.access")
    uvicorn_access.handlers = [handler]
    uvicorn_access.setLevel(logging.WARNING)
