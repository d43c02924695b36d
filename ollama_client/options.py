"""Generation options and response formats for Ollama requests."""

from __future__ import annotations

import enum
from dataclasses import dataclass, fields
from typing import Any


class FormatType(str, enum.Enum):
    """The format to return a response in; only ``json`` is accepted."""

    JSON = "json"


_U8 = (0, 2**8 - 1)
_U32 = (0, 2**32 - 1)
_I32 = (-(2**31), 2**31 - 1)

_INT_RANGES: dict[str, tuple[int, int]] = {
    "mirostat": _U8,
    "num_ctx": _U32,
    "num_gqa": _U32,
    "num_gpu": _U32,
    "num_thread": _U32,
    "repeat_last_n": _I32,
    "seed": _I32,
    "num_predict": _I32,
    "top_k": _U32,
}

_FLOAT_FIELDS = frozenset(
    {"mirostat_eta", "mirostat_tau", "repeat_penalty", "temperature", "tfs_z", "top_p"}
)


@dataclass(kw_only=True)
class GenerationOptions:
    """Model parameters for generation requests; unset values are sent as null.

    mirostat: Mirostat sampling (0 = disabled, 1 = Mirostat, 2 = Mirostat 2.0).
    mirostat_eta: learning rate of Mirostat (default 0.1).
    mirostat_tau: balance between coherence and diversity (default 5.0).
    num_ctx: size of the context window (default 2048).
    num_gqa: number of GQA groups in the transformer layer.
    num_gpu: number of layers to send to the GPU(s).
    num_thread: number of threads used during computation.
    repeat_last_n: how far back to look to prevent repetition (default 64).
    repeat_penalty: how strongly to penalize repetitions (default 1.1).
    temperature: model temperature (default 0.8).
    seed: random number seed (default 0).
    stop: stop sequence.
    tfs_z: tail free sampling (default 1).
    num_predict: maximum tokens to predict (default 128).
    top_k: reduces the probability of nonsense (default 40).
    top_p: works together with top_k (default 0.9).
    """

    mirostat: int | None = None
    mirostat_eta: float | None = None
    mirostat_tau: float | None = None
    num_ctx: int | None = None
    num_gqa: int | None = None
    num_gpu: int | None = None
    num_thread: int | None = None
    repeat_last_n: int | None = None
    repeat_penalty: float | None = None
    temperature: float | None = None
    seed: int | None = None
    stop: str | None = None
    tfs_z: float | None = None
    num_predict: int | None = None
    top_k: int | None = None
    top_p: float | None = None

    def __post_init__(self) -> None:
        for name, (low, high) in _INT_RANGES.items():
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an integer")
            if not low <= value <= high:
                raise ValueError(f"{name} must be between {low} and {high}")
        for name in _FLOAT_FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError(f"{name} must be a number")
        if self.stop is not None and not isinstance(self.stop, str):
            raise TypeError("stop must be a string")

    def to_dict(self) -> dict[str, Any]:
        """Return the options as a JSON-ready mapping, in field order."""
        result: dict[str, Any] = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if field.name in _FLOAT_FIELDS and value is not None:
                value = float(value)
            result[field.name] = value
        return result