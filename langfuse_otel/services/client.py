from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import TracebackType
from typing import Any

import httpx
from opentelemetry import trace as trace_api
from opentelemetry.context import Context
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SpanExporter
from opentelemetry.trace import Span as OtelSpan
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from langfuse_otel import __version__
from langfuse_otel.core.config import Settings, get_settings
from langfuse_otel.core.errors import ClientClosedError
from langfuse_otel.core.logging import get_logger
from langfuse_otel.core.security import basic_auth_header, mask_secret
from langfuse_otel.core.telemetry import (
    build_api_url,
    build_traces_endpoint,
    create_span_exporter,
    create_tracer_provider,
)
from langfuse_otel.schemas.common import ClientHealth
from langfuse_otel.services.observations import Trace
from langfuse_otel.telemetry import attributes as attrs
from langfuse_otel.telemetry.metrics import flush_total

AUTH_CHECK_PATH = "/api/public/projects"


class LangfuseClient:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        span_exporter: SpanExporter | None = None,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.logger = get_logger(__name__)
        self.settings.require_credentials()
        self.endpoint = build_traces_endpoint(self.settings.base_url)
        exporter = span_exporter
        if exporter is None and self.settings.tracing_enabled:
            exporter = create_span_exporter(self.settings, self.endpoint)
        self.provider: TracerProvider = create_tracer_provider(self.settings, exporter)
        if self.settings.register_global_provider:
            trace_api.set_tracer_provider(self.provider)
        self.tracer = self.provider.get_tracer(attrs.TRACER_NAME, __version__)
        self._http_transport = http_transport
        self._closed = False
        self.logger.info(
            "client.initialized",
            extra={
                "event": "client_initialized",
                "endpoint": self.endpoint,
                "public_key": mask_secret(self.settings.public_key),
            },
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def _start_span(self, name: str, context: Context | None) -> OtelSpan:
        return self.tracer.start_span(name, context=context)

    def create_trace(
        self,
        name: str,
        *,
        context: Context | None = None,
        user_id: str | None = None,
        session_id: str | None = None,
        tags: Sequence[str] | None = None,
        metadata: Mapping[str, Any] | None = None,
        input: Any = None,
        output: Any = None,
    ) -> Trace:
        if self._closed:
            raise ClientClosedError("client is closed")
        otel_span = self._start_span(name, context)
        otel_span.set_attribute(attrs.TRACE_NAME, name)
        if self.settings.release:
            otel_span.set_attribute(attrs.RELEASE, self.settings.release)
        if self.settings.environment:
            otel_span.set_attribute(attrs.ENVIRONMENT, self.settings.environment)
        trace = Trace(self, otel_span, context)
        with trace._ending_on_error():
            trace.update(
                user_id=user_id,
                session_id=session_id,
                tags=tags,
                metadata=metadata,
                input=input,
                output=output,
                public=True if self.settings.is_public else None,
            )
        self.logger.debug(
            "trace.created",
            extra={"event": "trace_created", "trace_id": trace.trace_id, "span_id": trace.span_id},
        )
        return trace

    def flush(self, timeout_millis: int = 30000) -> bool:
        ok = self.provider.force_flush(timeout_millis)
        flush_total.labels(status="ok" if ok else "timeout").inc()
        if not ok:
            self.logger.warning("client.flush_timeout", extra={"event": "client_flush_timeout"})
        return ok

    def close(self, timeout_millis: int = 30000) -> None:
        if self._closed:
            return
        self._closed = True
        self.flush(timeout_millis)
        self.provider.shutdown()
        self.logger.info("client.closed", extra={"event": "client_closed"})

    def __enter__(self) -> LangfuseClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _headers(self) -> dict[str, str]:
        return {"Authorization": basic_auth_header(self.settings.public_key, self.settings.secret_key)}

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_fixed(1),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    def auth_check(self) -> bool:
        url = build_api_url(self.settings.base_url, AUTH_CHECK_PATH)
        with httpx.Client(timeout=self.settings.export_timeout_seconds, transport=self._http_transport) as client:
            resp = client.get(url, headers=self._headers())
        resp.raise_for_status()
        return True

    def health(self) -> ClientHealth:
        try:
            self.auth_check()
            return ClientHealth(ok=True, detail="Langfuse public API reachable with the configured keys")
        except Exception as exc:  # noqa: BLE001
            return ClientHealth(ok=False, detail=str(exc))
