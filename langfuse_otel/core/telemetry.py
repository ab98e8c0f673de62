from __future__ import annotations

import httpx
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter

from langfuse_otel.core.config import Settings
from langfuse_otel.core.errors import ExporterCreationError, InvalidBaseURLError
from langfuse_otel.core.logging import get_logger
from langfuse_otel.core.security import basic_auth_header

OTLP_TRACES_PATH = "/api/public/otel/v1/traces"


def normalize_base_url(base_url: str) -> httpx.URL:
    raw = (base_url or "").strip()
    if not raw:
        raise InvalidBaseURLError("invalid base URL: empty value")
    if not raw.startswith(("http://", "https://")):
        raw = f"https://{raw}"
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as exc:
        raise InvalidBaseURLError(f"invalid base URL: {exc}") from exc
    if not url.host:
        raise InvalidBaseURLError(f"invalid base URL: no host in {base_url!r}")
    return url


def build_api_url(base_url: str, path: str) -> str:
    url = normalize_base_url(base_url)
    netloc = url.netloc.decode("ascii")
    prefix = url.path.rstrip("/")
    return f"{url.scheme}://{netloc}{prefix}/{path.lstrip('/')}"


def build_traces_endpoint(base_url: str) -> str:
    return build_api_url(base_url, OTLP_TRACES_PATH)


def create_span_exporter(settings: Settings, endpoint: str) -> OTLPSpanExporter:
    # http:// endpoints are exported without TLS; the scheme decides.
    headers = {"Authorization": basic_auth_header(settings.public_key, settings.secret_key)}
    try:
        return OTLPSpanExporter(
            endpoint=endpoint,
            headers=headers,
            timeout=settings.export_timeout_seconds,
        )
    except Exception as exc:  # noqa: BLE001
        raise ExporterCreationError(f"failed to create OTLP exporter: {exc}") from exc


def create_tracer_provider(settings: Settings, exporter: SpanExporter | None) -> TracerProvider:
    logger = get_logger(__name__)
    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: settings.service_name}))
    if not settings.tracing_enabled or exporter is None:
        logger.info("telemetry.disabled", extra={"event": "telemetry_disabled"})
        return provider

    provider.add_span_processor(
        BatchSpanProcessor(
            exporter,
            max_export_batch_size=settings.flush_at,
            schedule_delay_millis=int(settings.flush_interval_seconds * 1000),
        )
    )
    logger.debug("telemetry.enabled", extra={"event": "telemetry_enabled"})
    return provider
