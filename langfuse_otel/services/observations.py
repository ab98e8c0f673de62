from __future__ import annotations

import time
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from datetime import datetime
from types import TracebackType
from typing import TYPE_CHECKING, Any, Self

from opentelemetry import trace as trace_api
from opentelemetry.context import Context
from opentelemetry.trace import Span as OtelSpan
from opentelemetry.trace import Status, StatusCode, format_span_id, format_trace_id

from langfuse_otel.schemas.enums import LogLevel, ObservationType
from langfuse_otel.schemas.generation import Cost, GenerationParams, Usage, coerce_model
from langfuse_otel.telemetry import attributes as attrs
from langfuse_otel.telemetry.metrics import observation_duration_ms, observations_total
from langfuse_otel.telemetry.spans import (
    apply_level,
    format_timestamp,
    set_json_attribute,
    set_metadata_attributes,
    to_json,
    to_ns,
)

if TYPE_CHECKING:
    from langfuse_otel.services.client import LangfuseClient


class _Observed:
    """Lifecycle shared by traces and observations backed by one OTel span."""

    kind: str = "trace"

    def __init__(self, client: LangfuseClient, otel_span: OtelSpan, parent_context: Context | None) -> None:
        self._client = client
        self._span = otel_span
        self._context = trace_api.set_span_in_context(otel_span, parent_context)
        self._started = time.perf_counter()
        self._ended = False
        self._level: LogLevel | None = None
        self._status_message: str | None = None
        observations_total.labels(type=self.kind).inc()

    @property
    def otel_span(self) -> OtelSpan:
        return self._span

    @property
    def context(self) -> Context:
        return self._context

    @property
    def trace_id(self) -> str:
        return format_trace_id(self._span.get_span_context().trace_id)

    @property
    def span_id(self) -> str:
        return format_span_id(self._span.get_span_context().span_id)

    @property
    def ended(self) -> bool:
        return self._ended

    def _set_level(self, level: LogLevel | str | None, status_message: str | None) -> None:
        if level is not None:
            self._level = LogLevel(level)
        if status_message is not None:
            self._status_message = status_message

    def end(self, end_time: datetime | None = None) -> None:
        if self._ended:
            return
        if self._level is not None:
            apply_level(self._span, self._level, self._status_message)
        elif self._status_message:
            self._span.set_attribute(attrs.OBSERVATION_STATUS_MESSAGE, self._status_message)
        self._span.end(end_time=to_ns(end_time))
        self._ended = True
        observation_duration_ms.labels(type=self.kind).observe((time.perf_counter() - self._started) * 1000)

    def _fail(self, exc: BaseException) -> None:
        self._span.record_exception(exc)
        self._span.set_status(Status(StatusCode.ERROR, str(exc)))

    @contextmanager
    def _ending_on_error(self) -> Iterator[None]:
        # A span whose attributes could not be applied is still ended and exported.
        try:
            yield
        except Exception as exc:
            self._fail(exc)
            self.end()
            raise

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is not None:
            self._fail(exc)
        self.end()


class _ObservationParent(_Observed):
    """Something that child spans, generations and events can hang from."""

    def span(
        self,
        name: str,
        *,
        input: Any = None,
        output: Any = None,
        metadata: Mapping[str, Any] | None = None,
        level: LogLevel | str | None = None,
        status_message: str | None = None,
    ) -> Span:
        span = Span(self._client, self._client._start_span(name, self._context), self._context)
        with span._ending_on_error():
            span.update(input=input, output=output, metadata=metadata, level=level, status_message=status_message)
        return span

    def generation(
        self,
        name: str,
        *,
        model: str | None = None,
        usage: Usage | Mapping[str, Any] | None = None,
        cost: Cost | Mapping[str, Any] | None = None,
        model_parameters: GenerationParams | Mapping[str, Any] | None = None,
        input: Any = None,
        output: Any = None,
        completion_start_time: datetime | None = None,
        prompt_name: str | None = None,
        prompt_version: int | None = None,
        metadata: Mapping[str, Any] | None = None,
        level: LogLevel | str | None = None,
        status_message: str | None = None,
    ) -> Generation:
        generation = Generation(self._client, self._client._start_span(name, self._context), self._context)
        with generation._ending_on_error():
            generation.update(
                model=model,
                usage=usage,
                cost=cost,
                model_parameters=model_parameters,
                input=input,
                output=output,
                completion_start_time=completion_start_time,
                prompt_name=prompt_name,
                prompt_version=prompt_version,
                metadata=metadata,
                level=level,
                status_message=status_message,
            )
        return generation

    def event(
        self,
        name: str,
        *,
        input: Any = None,
        output: Any = None,
        metadata: Mapping[str, Any] | None = None,
        level: LogLevel | str | None = None,
        status_message: str | None = None,
    ) -> Event:
        event = Event(self._client, self._client._start_span(name, self._context), self._context)
        with event._ending_on_error():
            event._record(input=input, output=output, metadata=metadata, level=level, status_message=status_message)
        event.end()
        return event


class Trace(_ObservationParent):
    kind = "trace"

    def update(
        self,
        *,
        user_id: str | None = None,
        session_id: str | None = None,
        tags: Sequence[str] | None = None,
        metadata: Mapping[str, Any] | None = None,
        input: Any = None,
        output: Any = None,
        public: bool | None = None,
    ) -> Trace:
        if user_id is not None:
            self._span.set_attribute(attrs.TRACE_USER_ID, user_id)
        if session_id is not None:
            self._span.set_attribute(attrs.TRACE_SESSION_ID, session_id)
        if tags is not None:
            self._span.set_attribute(attrs.TRACE_TAGS, to_json(list(tags)))
        if public is not None:
            self._span.set_attribute(attrs.TRACE_PUBLIC, public)
        set_metadata_attributes(self._span, attrs.TRACE_METADATA, metadata)
        set_json_attribute(self._span, attrs.TRACE_INPUT, input)
        set_json_attribute(self._span, attrs.TRACE_OUTPUT, output)
        return self


class _Observation(_Observed):
    observation_type: ObservationType

    def __init__(self, client: LangfuseClient, otel_span: OtelSpan, parent_context: Context | None) -> None:
        super().__init__(client, otel_span, parent_context)
        otel_span.set_attribute(attrs.OBSERVATION_TYPE, self.observation_type.value)

    def _record(
        self,
        *,
        input: Any = None,
        output: Any = None,
        metadata: Mapping[str, Any] | None = None,
        level: LogLevel | str | None = None,
        status_message: str | None = None,
    ) -> None:
        set_metadata_attributes(self._span, attrs.OBSERVATION_METADATA, metadata)
        set_json_attribute(self._span, attrs.OBSERVATION_INPUT, input)
        set_json_attribute(self._span, attrs.OBSERVATION_OUTPUT, output)
        self._set_level(level, status_message)

    def _fail(self, exc: BaseException) -> None:
        self._set_level(LogLevel.ERROR, str(exc))
        self._span.record_exception(exc)


class Span(_Observation, _ObservationParent):
    kind = "span"
    observation_type = ObservationType.SPAN

    def update(
        self,
        *,
        input: Any = None,
        output: Any = None,
        metadata: Mapping[str, Any] | None = None,
        level: LogLevel | str | None = None,
        status_message: str | None = None,
    ) -> Span:
        self._record(input=input, output=output, metadata=metadata, level=level, status_message=status_message)
        return self


class Generation(_Observation, _ObservationParent):
    kind = "generation"
    observation_type = ObservationType.GENERATION
    _prompt_name: str | None = None

    def update(
        self,
        *,
        model: str | None = None,
        usage: Usage | Mapping[str, Any] | None = None,
        cost: Cost | Mapping[str, Any] | None = None,
        model_parameters: GenerationParams | Mapping[str, Any] | None = None,
        input: Any = None,
        output: Any = None,
        completion_start_time: datetime | None = None,
        prompt_name: str | None = None,
        prompt_version: int | None = None,
        metadata: Mapping[str, Any] | None = None,
        level: LogLevel | str | None = None,
        status_message: str | None = None,
    ) -> Generation:
        if model is not None:
            self._span.set_attribute(attrs.OBSERVATION_MODEL, model)
        usage = coerce_model(Usage, usage)
        if usage is not None:
            self._span.set_attribute(attrs.OBSERVATION_USAGE_DETAILS, to_json(usage.to_attribute()))
        cost = coerce_model(Cost, cost)
        if cost is not None:
            self._span.set_attribute(attrs.OBSERVATION_COST_DETAILS, to_json(cost.to_attribute()))
        model_parameters = coerce_model(GenerationParams, model_parameters)
        if model_parameters is not None:
            self._span.set_attribute(attrs.OBSERVATION_MODEL_PARAMETERS, to_json(model_parameters.to_attribute()))
        if completion_start_time is not None:
            self._span.set_attribute(
                attrs.OBSERVATION_COMPLETION_START_TIME, format_timestamp(completion_start_time)
            )
        if prompt_name is not None:
            self._prompt_name = prompt_name
            self._span.set_attribute(attrs.OBSERVATION_PROMPT_NAME, prompt_name)
        # A version is only meaningful next to a name, possibly set by an earlier update.
        if prompt_version is not None and self._prompt_name is not None:
            self._span.set_attribute(attrs.OBSERVATION_PROMPT_VERSION, int(prompt_version))
        self._record(input=input, output=output, metadata=metadata, level=level, status_message=status_message)
        return self


class Event(_Observation):
    """A zero-duration observation; it is already ended when returned."""

    kind = "event"
    observation_type = ObservationType.EVENT
