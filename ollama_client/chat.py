"""Chat messages, chat requests and chat responses."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from ollama_client.images import Image
from ollama_client.options import FormatType, GenerationOptions

_U16_MAX = 2**16 - 1
_U64_MAX = 2**64 - 1


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


def _parse_images(value: Any) -> tuple[Image, ...] | None:
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValueError("field 'images' must be a list")
    images = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError("every image must be a base64 string")
        images.append(Image.from_base64(item))
    return tuple(images)


class MessageRole(str, enum.Enum):
    """Who a chat message comes from."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass(frozen=True)
class ChatMessage:
    """One message of a chat conversation, optionally carrying images."""

    role: MessageRole
    content: str
    images: tuple[Image, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "role", MessageRole(self.role))
        if self.images is not None:
            object.__setattr__(self, "images", tuple(self.images))

    @classmethod
    def user(cls, content: str) -> ChatMessage:
        """A message written by the user."""
        return cls(MessageRole.USER, content)

    @classmethod
    def assistant(cls, content: str) -> ChatMessage:
        """A message written by the assistant."""
        return cls(MessageRole.ASSISTANT, content)

    @classmethod
    def system(cls, content: str) -> ChatMessage:
        """A system message."""
        return cls(MessageRole.SYSTEM, content)

    def with_images(self, images: Iterable[Image]) -> ChatMessage:
        """Return a copy whose images are replaced by ``images``."""
        return replace(self, images=tuple(images))

    def add_image(self, image: Image) -> ChatMessage:
        """Return a copy with ``image`` appended to its images."""
        return replace(self, images=(*(self.images or ()), image))

    def to_dict(self) -> dict[str, Any]:
        """Return the message as a JSON-ready mapping."""
        return {
            "role": self.role.value,
            "content": self.content,
            "images": (
                None if self.images is None else [image.to_json() for image in self.images]
            ),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChatMessage:
        """Build a message from its JSON mapping."""
        data = _as_mapping(data, "chat message")
        role_value = _str(data, "role")
        try:
            role = MessageRole(role_value)
        except ValueError:
            raise ValueError(f"unknown message role {role_value!r}") from None
        return cls(role, _str(data, "content"), _parse_images(data.get("images")))


@dataclass
class ChatMessageRequest:
    """A chat request: a model name and the conversation so far."""

    model_name: str
    messages: list[ChatMessage]
    options: GenerationOptions | None = None
    template: str | None = None
    format: FormatType | None = None

    def to_dict(self, stream: bool = False) -> dict[str, Any]:
        """Return the request body; ``stream`` selects streamed replies."""
        return {
            "model": self.model_name,
            "messages": [message.to_dict() for message in self.messages],
            "options": None if self.options is None else self.options.to_dict(),
            "template": self.template,
            "format": None if self.format is None else FormatType(self.format).value,
            "stream": bool(stream),
        }


@dataclass(frozen=True)
class ChatMessageFinalResponseData:
    """Statistics sent with the last chat response."""

    total_duration: int
    prompt_eval_count: int
    prompt_eval_duration: int
    eval_count: int
    eval_duration: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChatMessageFinalResponseData:
        """Build the final statistics from a response mapping."""
        data = _as_mapping(data, "final response data")
        return cls(
            total_duration=_uint(data, "total_duration", _U64_MAX),
            prompt_eval_count=_uint(data, "prompt_eval_count", _U16_MAX),
            prompt_eval_duration=_uint(data, "prompt_eval_duration", _U64_MAX),
            eval_count=_uint(data, "eval_count", _U16_MAX),
            eval_duration=_uint(data, "eval_duration", _U64_MAX),
        )


@dataclass(frozen=True)
class ChatMessageResponse:
    """A chat response, whole or one piece of a stream."""

    model: str
    created_at: str
    message: ChatMessage | None
    done: bool
    final_data: ChatMessageFinalResponseData | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChatMessageResponse:
        """Build a response; final data is kept only when all its fields are valid."""
        data = _as_mapping(data, "chat response")
        raw_message = data.get("message")
        message = None if raw_message is None else ChatMessage.from_dict(raw_message)
        try:
            final_data: ChatMessageFinalResponseData | None = (
                ChatMessageFinalResponseData.from_dict(data)
            )
        except ValueError:
            final_data = None
        return cls(
            model=_str(data, "model"),
            created_at=_str(data, "created_at"),
            message=message,
            done=_bool(data, "done"),
            final_data=final_data,
        )


__all__ = [
    "ChatMessage",
    "ChatMessageFinalResponseData",
    "ChatMessageRequest",
    "ChatMessageResponse",
    "MessageRole",
]