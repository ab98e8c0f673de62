"""A multi-step workflow: retrieval, a generation nested in a span, events."""

from __future__ import annotations

import time

from langfuse_otel import GenerationParams, Usage, create_client


def main() -> None:
    with create_client() as client:
        with client.create_trace(
            "document-qa",
            user_id="user-456",
            session_id="session-789",
            tags=["rag", "qa"],
            metadata={"app_version": "2.1.0"},
            input={"question": "How does the retry policy work?"},
        ) as trace:
            with trace.span("retrieve-documents", input={"top_k": 5}) as retrieval:
                time.sleep(0.05)
                retrieval.update(output={"documents": ["doc-1", "doc-7", "doc-9"]})

            with trace.span("answer") as answer:
                with answer.generation(
                    "compose-answer",
                    model="gpt-4o",
                    model_parameters=GenerationParams(temperature=0.2, max_tokens=400),
                    input=[{"role": "user", "content": "Summarize the retry policy."}],
                ) as generation:
                    time.sleep(0.2)
                    generation.update(
                        output="Retries back off exponentially up to five attempts.",
                        usage=Usage(prompt_tokens=812, completion_tokens=64, total_tokens=876),
                    )
                answer.event("answer-validated", metadata={"checks": "citations"})

            trace.update(output={"answer": "Retries back off exponentially up to five attempts."})


if __name__ == "__main__":
    main()
