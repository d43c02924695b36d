"""Local model descriptions and model management requests and statuses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

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


def _check_u64(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field '{key}' must be an integer")
    if not 0 <= value <= _U64_MAX:
        raise ValueError(f"field '{key}' must be between 0 and {_U64_MAX}")
    return value


def _u64(data: Mapping[str, Any], key: str) -> int:
    return _check_u64(key, _get(data, key))


def _optional_u64(data: Mapping[str, Any], key: str) -> int | None:
    value = data.get(key)
    return None if value is None else _check_u64(key, value)


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string")
    return value


@dataclass(frozen=True)
class LocalModel:
    """A model that has been pulled to the local Ollama instance."""

    name: str
    modified_at: str
    size: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LocalModel:
        """Build a local model from its JSON mapping."""
        data = _as_mapping(data, "local model")
        return cls(
            name=_str(data, "name"),
            modified_at=_str(data, "modified_at"),
            size=_u64(data, "size"),
        )


@dataclass(frozen=True)
class ModelInfo:
    """Details about a model: license, modelfile, parameters and template."""

    license: str
    modelfile: str
    parameters: str
    template: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ModelInfo:
        """Build model details from their JSON mapping."""
        data = _as_mapping(data, "model info")
        return cls(
            license=_str(data, "license"),
            modelfile=_str(data, "modelfile"),
            parameters=_str(data, "parameters"),
            template=_str(data, "template"),
        )


@dataclass(frozen=True)
class CreateModelRequest:
    """A request to create a model from a Modelfile path or Modelfile contents."""

    model_name: str
    path: str | None = None
    modelfile: str | None = None

    @classmethod
    def from_path(cls, model_name: str, path: str) -> CreateModelRequest:
        """Create a model described in the Modelfile at ``path``."""
        return cls(model_name=model_name, path=path)

    @classmethod
    def from_modelfile(cls, model_name: str, modelfile: str) -> CreateModelRequest:
        """Create a model described by the Modelfile contents ``modelfile``."""
        return cls(model_name=model_name, modelfile=modelfile)

    def to_dict(self, stream: bool = False) -> dict[str, Any]:
        """Return the request body; ``stream`` selects streamed statuses."""
        return {
            "name": self.model_name,
            "path": self.path,
            "modelfile": self.modelfile,
            "stream": bool(stream),
        }


@dataclass(frozen=True)
class CreateModelStatus:
    """A status reported while creating a model."""

    message: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CreateModelStatus:
        """Build a status from a mapping holding a ``status`` field."""
        data = _as_mapping(data, "create model status")
        return cls(_str(data, "status"))


@dataclass(frozen=True)
class PullModelStatus:
    """A status reported while pulling a model."""

    message: str
    digest: str | None = None
    total: int | None = None
    completed: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PullModelStatus:
        """Build a status from its JSON mapping."""
        data = _as_mapping(data, "pull model status")
        return cls(
            message=_str(data, "status"),
            digest=_optional_str(data, "digest"),
            total=_optional_u64(data, "total"),
            completed=_optional_u64(data, "completed"),
        )


@dataclass(frozen=True)
class PushModelStatus:
    """A status reported while pushing a model."""

    message: str
    digest: str | None = None
    total: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PushModelStatus:
        """Build a status from its JSON mapping."""
        data = _as_mapping(data, "push model status")
        return cls(
            message=_str(data, "status"),
            digest=_optional_str(data, "digest"),
            total=_optional_u64(data, "total"),
        )


def _transfer_request(model_name: str, allow_insecure: bool, stream: bool) -> dict[str, Any]:
    """Request body shared by pull and push requests."""
    return {
        "name": model_name,
        "insecure": bool(allow_insecure),
        "stream": bool(stream),
    }


__all__ = [
    "CreateModelRequest",
    "CreateModelStatus",
    "LocalModel",
    "ModelInfo",
    "PullModelStatus",
    "PushModelStatus",
]