from __future__ import annotations

from prometheus_client import Counter, Histogram

observations_total = Counter(
    "langfuse_otel_observations_total",
    "Total observations started",
    ["type"],
)

observation_duration_ms = Histogram(
    "langfuse_otel_observation_duration_ms",
    "Observation duration in milliseconds",
    ["type"],
    buckets=(1, 5, 10, 50, 100, 250, 500, 1000, 5000, 30000),
)

flush_total = Counter(
    "langfuse_otel_flush_total",
    "Total client flushes",
    ["status"],
)
