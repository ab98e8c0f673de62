"""Record a failed call, then error and warning events."""

from __future__ import annotations

from langfuse_otel import LogLevel, create_client


def call_external_api() -> None:
    raise TimeoutError("Connection timeout after 5s")


def main() -> None:
    with create_client() as client:
        with client.create_trace("failed-api-call", user_id="user-error-test", input="Test error handling") as trace:
            try:
                with trace.span(
                    "external-api-call",
                    input={"endpoint": "https://api.example.com/data", "method": "GET"},
                    metadata={"retry_count": "3", "timeout_duration": "5s"},
                ):
                    call_external_api()
            except TimeoutError as exc:
                trace.event(
                    "api-error-occurred",
                    input={"error_type": "timeout", "service": "external-api", "impact": "high"},
                    level=LogLevel.ERROR,
                    status_message=str(exc),
                )
                trace.event("retry-attempted", input={"attempt": 1, "delay": "1s"}, level=LogLevel.WARNING)


if __name__ == "__main__":
    main()
