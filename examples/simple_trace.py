"""Record one trace with a child span and an event.

Reads LANGFUSE_PUBLIC_KEY, LANGFUSE_SECRET_KEY and LANGFUSE_BASE_URL.
"""

from __future__ import annotations

import time

from langfuse_otel import create_client


def main() -> None:
    with create_client() as client:
        with client.create_trace(
            "user-request",
            user_id="user-123",
            session_id="session-456",
            tags=["production", "api"],
            input={"query": "What is the weather like today?"},
        ) as trace:
            with trace.span("data-processing", input={"records": 100}, metadata={"step": "validation"}) as span:
                time.sleep(0.1)
                span.update(output={"valid_records": 95, "invalid_records": 5})

            trace.event("processing-complete", metadata={"duration": "100ms"})
            trace.update(output={"answer": "sunny, 24C"})
        print(f"trace {trace.trace_id} recorded")


if __name__ == "__main__":
    main()
