from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from opentelemetry.trace import Span, Status, StatusCode
from pydantic_core import PydanticSerializationError, to_jsonable_python

from langfuse_otel.schemas.enums import LogLevel
from langfuse_otel.telemetry.attributes import OBSERVATION_LEVEL, OBSERVATION_STATUS_MESSAGE

_ERROR_LEVELS = (LogLevel.ERROR, LogLevel.WARNING)
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def to_json(value: Any) -> str:
    # Unknown objects are rendered with str(); encoding never fails.
    try:
        return json.dumps(
            to_jsonable_python(value, serialize_unknown=True, bytes_mode="base64"),
            ensure_ascii=False,
        )
    except (ValueError, UnicodeDecodeError, PydanticSerializationError):
        # Circular containers and other unencodable values.
        return json.dumps(str(value), ensure_ascii=False)


def set_json_attribute(span: Span, key: str, value: Any) -> None:
    if value is None:
        return
    span.set_attribute(key, to_json(value))


def set_metadata_attributes(span: Span, prefix: str, metadata: Mapping[str, Any] | None) -> None:
    if not metadata:
        return
    for key, value in metadata.items():
        if value is None:
            continue
        span.set_attribute(f"{prefix}.{key}", value if isinstance(value, str) else to_json(value))


def apply_level(span: Span, level: LogLevel | str, status_message: str | None = None) -> LogLevel:
    level = LogLevel(level)
    span.set_attribute(OBSERVATION_LEVEL, level.value)
    if status_message:
        span.set_attribute(OBSERVATION_STATUS_MESSAGE, status_message)
    if level in _ERROR_LEVELS:
        span.set_status(Status(StatusCode.ERROR, status_message))
    else:
        span.set_status(Status(StatusCode.OK))
    return level


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.isoformat()


def to_ns(value: datetime | None) -> int | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return (value - _EPOCH) // timedelta(microseconds=1) * 1000
