import httpx
import pytest
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

from langfuse_otel.core import telemetry as telemetry_module
from langfuse_otel.core.errors import ExporterCreationError, InvalidBaseURLError
from langfuse_otel.core.telemetry import build_api_url, build_traces_endpoint, create_span_exporter


def test_scheme_defaults_to_https():
    assert build_traces_endpoint("cloud.langfuse.com") == "https://cloud.langfuse.com/api/public/otel/v1/traces"


def test_plain_http_and_port_are_kept():
    assert build_traces_endpoint("http://localhost:3000") == "http://localhost:3000/api/public/otel/v1/traces"


def test_base_path_prefix_is_kept_and_query_dropped():
    assert (
        build_traces_endpoint("https://example.com/langfuse/?x=1#top")
        == "https://example.com/langfuse/api/public/otel/v1/traces"
    )


def test_build_api_url():
    assert build_api_url("https://cloud.langfuse.com/", "/api/public/projects") == (
        "https://cloud.langfuse.com/api/public/projects"
    )


@pytest.mark.parametrize("base_url", ["", "   ", "https://"])
def test_invalid_base_url(base_url):
    with pytest.raises(InvalidBaseURLError):
        build_traces_endpoint(base_url)


def test_unparseable_base_url_keeps_cause():
    with pytest.raises(InvalidBaseURLError) as excinfo:
        build_traces_endpoint("http://[::1")
    assert isinstance(excinfo.value.__cause__, httpx.InvalidURL)


def test_create_span_exporter_targets_endpoint(settings):
    endpoint = build_traces_endpoint(settings.base_url)
    exporter = create_span_exporter(settings, endpoint)
    try:
        assert isinstance(exporter, OTLPSpanExporter)
        assert exporter._endpoint == endpoint
    finally:
        exporter.shutdown()


def test_create_span_exporter_wraps_failures(settings, monkeypatch):
    def _broken(**kwargs):  # noqa: ANN003
        raise RuntimeError("no transport")

    monkeypatch.setattr(telemetry_module, "OTLPSpanExporter", _broken)
    with pytest.raises(ExporterCreationError) as excinfo:
        create_span_exporter(settings, "http://localhost:3000/api/public/otel/v1/traces")
    assert isinstance(excinfo.value.__cause__, RuntimeError)
