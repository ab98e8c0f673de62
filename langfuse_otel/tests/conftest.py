from __future__ import annotations

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from langfuse_otel.core.config import Settings
from langfuse_otel.services.client import LangfuseClient


def make_settings(**overrides) -> Settings:  # noqa: ANN003
    values = {
        "public_key": "pk-lf-1234567890",
        "secret_key": "sk-lf-0987654321",
        "base_url": "http://localhost:3000",
        "register_global_provider": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def client(settings, exporter):
    langfuse = LangfuseClient(settings, span_exporter=exporter)
    yield langfuse
    langfuse.close()


@pytest.fixture
def finished_spans(client, exporter):
    def _collect() -> dict:
        client.flush()
        return {span.name: span for span in exporter.get_finished_spans()}

    return _collect


@pytest.fixture
def settings_factory():
    return make_settings
