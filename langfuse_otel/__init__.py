"""Langfuse tracing over OpenTelemetry.

Traces, spans, generations and events are recorded as OpenTelemetry spans
carrying ``langfuse.*`` attributes and exported to Langfuse over OTLP/HTTP.
"""

from __future__ import annotations

__version__ = "0.1.0"

from langfuse_otel.core.config import Settings, get_settings
from langfuse_otel.core.errors import (
    ClientClosedError,
    ExporterCreationError,
    InvalidBaseURLError,
    LangfuseError,
    MissingCredentialsError,
)
from langfuse_otel.core.logging import configure_logging
from langfuse_otel.schemas.common import ClientHealth
from langfuse_otel.schemas.enums import LogLevel, ObservationType
from langfuse_otel.schemas.generation import Cost, GenerationParams, Usage
from langfuse_otel.services.client import LangfuseClient
from langfuse_otel.services.observations import Event, Generation, Span, Trace


def create_client(settings: Settings | None = None) -> LangfuseClient:
    client_settings = settings or get_settings()
    configure_logging(client_settings)
    return LangfuseClient(client_settings)


__all__ = [
    "ClientClosedError",
    "ClientHealth",
    "Cost",
    "Event",
    "ExporterCreationError",
    "Generation",
    "GenerationParams",
    "InvalidBaseURLError",
    "LangfuseClient",
    "LangfuseError",
    "LogLevel",
    "MissingCredentialsError",
    "ObservationType",
    "Settings",
    "Span",
    "Trace",
    "Usage",
    "__version__",
    "configure_logging",
    "create_client",
]
