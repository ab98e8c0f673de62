"""Track one model call with usage, cost and model parameters."""

from __future__ import annotations

import time
from datetime import UTC, datetime

from langfuse_otel import Cost, GenerationParams, Usage, create_client


def main() -> None:
    with create_client() as client:
        with client.create_trace("llm-chat", user_id="user-789", input="Write a function to sort a list") as trace:
            generation = trace.generation(
                "openai-completion",
                model="gpt-4o-mini",
                input=[
                    {"role": "system", "content": "You are a helpful Python programming assistant."},
                    {"role": "user", "content": "Write a function to sort a list of integers"},
                ],
                model_parameters=GenerationParams(temperature=0.7, max_tokens=500, top_p=1.0),
                completion_start_time=datetime.now(UTC),
            )
            time.sleep(0.5)
            generation.update(
                output={"content": "def sort_ints(values):\n    return sorted(values)", "finish_reason": "stop"},
                usage=Usage(prompt_tokens=45, completion_tokens=32, total_tokens=77),
                cost=Cost(input=0.00015, output=0.0006, total=0.00075),
            )
            generation.end()


if __name__ == "__main__":
    main()
