import httpx

from langfuse_otel.services.client import LangfuseClient


def _client(settings, exporter, handler):  # noqa: ANN001
    return LangfuseClient(settings, span_exporter=exporter, http_transport=httpx.MockTransport(handler))


def test_health_ok(settings, exporter):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["authorization"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"data": [{"id": "project-1"}]})

    client = _client(settings, exporter, handler)
    try:
        health = client.health()
    finally:
        client.close()
    assert health.ok is True
    assert seen["url"] == "http://localhost:3000/api/public/projects"
    assert seen["authorization"].startswith("Basic ")


def test_health_reports_rejected_keys(settings, exporter):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(401, json={"message": "Invalid credentials"})

    client = _client(settings, exporter, handler)
    try:
        health = client.health()
    finally:
        client.close()
    assert health.ok is False
    assert "401" in health.detail
    # Only transport errors are retried.
    assert len(calls) == 1


def test_health_retries_transport_errors(settings, exporter):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(settings, exporter, handler)
    client.auth_check.retry.sleep = lambda seconds: None
    try:
        health = client.health()
    finally:
        client.close()
    assert health.ok is False
    assert "connection refused" in health.detail
    assert len(calls) == 3
