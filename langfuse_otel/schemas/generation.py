from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

ModelT = TypeVar("ModelT", bound=BaseModel)


class Usage(BaseModel):
    model_config = ConfigDict(extra="allow")

    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None

    def to_attribute(self) -> dict[str, Any]:
        # Zero counters are dropped along with unset ones.
        return {k: v for k, v in self.model_dump().items() if v}


class Cost(BaseModel):
    model_config = ConfigDict(extra="allow")

    total: float | None = None
    input: float | None = None
    output: float | None = None

    def to_attribute(self) -> dict[str, Any]:
        return {k: v for k, v in self.model_dump().items() if v}


class GenerationParams(BaseModel):
    """Model parameters of one inference call.

    Unset fields are left out of the attribute; an explicit zero (for example
    ``temperature=0``) is kept. Provider-specific parameters such as ``seed``
    may be passed as extra fields and are serialized next to the named ones.
    """

    model_config = ConfigDict(extra="allow")

    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None
    stop: list[str] | None = None

    def to_attribute(self) -> dict[str, Any]:
        data = self.model_dump(exclude_none=True)
        if not data.get("stop", True):
            data.pop("stop")
        return data


def coerce_model(model: type[ModelT], value: ModelT | Mapping[str, Any] | None) -> ModelT | None:
    if value is None or isinstance(value, model):
        return value
    return model.model_validate(dict(value))
