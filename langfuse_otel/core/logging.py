from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from langfuse_otel.core.config import Settings

PACKAGE_LOGGER = "langfuse_otel"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("event", "trace_id", "span_id", "endpoint", "public_key"):
            value = getattr(record, key, None)
            if value:
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def configure_logging(settings: Settings) -> None:
    # Only the package logger: the host application owns the root logger.
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.WARNING))
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
