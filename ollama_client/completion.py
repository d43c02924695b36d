"""Completion requests and responses, and embeddings responses."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from ollama_client.images import Image
from ollama_client.options import FormatType, GenerationOptions

_U16_MAX = 2**16 - 1
_U64_MAX = 2**64 - 1
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _as_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a JSON object")
    return data


def _get(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field '{key}'") from None


def _str(data: Mapping[str, Any], key: str) -> str:
    value = _get(data, key)
    if not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string")
    return value


def _bool(data: Mapping[str, Any], key: str) -> bool:
    value = _get(data, key)
    if not isinstance(value, bool):
        raise ValueError(f"field '{key}' must be a boolean")
    return value


def _uint(data: Mapping[str, Any], key: str, maximum: int) -> int:
    value = _get(data, key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field '{key}' must be an integer")
    if not 0 <= value <= maximum:
        raise ValueError(f"field '{key}' must be between 0 and {maximum}")
    return value


@dataclass(frozen=True)
class GenerationContext:
    """An encoding of a conversation, sent back to keep conversational memory."""

    tokens: tuple[int, ...]

    def __post_init__(self) -> None:
        tokens = tuple(self.tokens)
        for token in tokens:
            if isinstance(token, bool) or not isinstance(token, int):
                raise ValueError("context tokens must be integers")
            if not _I32_MIN <= token <= _I32_MAX:
                raise ValueError("context tokens must fit in 32 signed bits")
        object.__setattr__(self, "tokens", tokens)

    def to_json(self) -> list[int]:
        """Return the context as sent on the wire: a list of integers."""
        return list(self.tokens)

    @classmethod
    def from_json(cls, data: Any) -> GenerationContext:
        """Build a context from its wire form, a list of integers."""
        if not isinstance(data, list):
            raise ValueError("context must be a list of integers")
        return cls(tuple(data))


@dataclass
class GenerationRequest:
    """A completion request for a model and a prompt."""

    model_name: str
    prompt: str
    images: list[Image] = field(default_factory=list)
    options: GenerationOptions | None = None
    system: str | None = None
    template: str | None = None
    context: GenerationContext | None = None
    format: FormatType | None = None

    def add_image(self, image: Image) -> GenerationRequest:
        """Return a copy with ``image`` appended to the images."""
        return replace(self, images=[*self.images, image])

    def to_dict(self, stream: bool = False) -> dict[str, Any]:
        """Return the request body; ``stream`` selects streamed replies."""
        return {
            "model": self.model_name,
            "prompt": self.prompt,
            "images": [image.to_json() for image in self.images],
            "options": None if self.options is None else self.options.to_dict(),
            "system": self.system,
            "template": self.template,
            "context": None if self.context is None else self.context.to_json(),
            "format": None if self.format is None else FormatType(self.format).value,
            "stream": bool(stream),
        }


@dataclass(frozen=True)
class GenerationFinalResponseData:
    """Context and statistics sent with the last completion response."""

    context: GenerationContext
    total_duration: int
    prompt_eval_count: int
    prompt_eval_duration: int
    eval_count: int
    eval_duration: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GenerationFinalResponseData:
        """Build the final data from a response mapping."""
        data = _as_mapping(data, "final response data")
        return cls(
            context=GenerationContext.from_json(_get(data, "context")),
            total_duration=_uint(data, "total_duration", _U64_MAX),
            prompt_eval_count=_uint(data, "prompt_eval_count", _U16_MAX),
            prompt_eval_duration=_uint(data, "prompt_eval_duration", _U64_MAX),
            eval_count=_uint(data, "eval_count", _U16_MAX),
            eval_duration=_uint(data, "eval_duration", _U64_MAX),
        )


@dataclass(frozen=True)
class GenerationResponse:
    """A completion response, whole or one token of a stream."""

    model: str
    created_at: str
    response: str
    done: bool
    final_data: GenerationFinalResponseData | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GenerationResponse:
        """Build a response; final data is kept only when all its fields are valid."""
        data = _as_mapping(data, "generation response")
        try:
            final_data: GenerationFinalResponseData | None = (
                GenerationFinalResponseData.from_dict(data)
            )
        except ValueError:
            final_data = None
        return cls(
            model=_str(data, "model"),
            created_at=_str(data, "created_at"),
            response=_str(data, "response"),
            done=_bool(data, "done"),
            final_data=final_data,
        )


@dataclass(frozen=True)
class GenerateEmbeddingsResponse:
    """The embedding vector generated for a prompt."""

    embeddings: tuple[float, ...]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GenerateEmbeddingsResponse:
        """Build the response from a mapping holding an ``embedding`` list."""
        data = _as_mapping(data, "embeddings response")
        values = _get(data, "embedding")
        if not isinstance(values, list):
            raise ValueError("field 'embedding' must be a list")
        embeddings = []
        for value in values:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError("embedding values must be numbers")
            embeddings.append(float(value))
        return cls(tuple(embeddings))


def _embeddings_request(
    model_name: str, prompt: str, options: GenerationOptions | None
) -> dict[str, Any]:
    return {
        "model": model_name,
        "prompt": prompt,
        "options": None if options is None else options.to_dict(),
    }


__all__ = [
    "GenerateEmbeddingsResponse",
    "GenerationContext",
    "GenerationFinalResponseData",
    "GenerationRequest",
    "GenerationResponse",
]