"""Error type raised by the Ollama client."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class OllamaError(Exception):
    """An error reported by an Ollama server or met while talking to one."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"An error occurred with Ollama: {self.message}"

    def __repr__(self) -> str:
        return f"Ollama error: {self.message}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OllamaError:
        """Build an error from a server error body such as ``{"error": "..."}``."""
        if not isinstance(data, Mapping):
            raise ValueError("error body must be a JSON object")
        try:
            message = data["error"]
        except KeyError:
            raise ValueError("error body has no 'error' field") from None
        if not isinstance(message, str):
            raise ValueError("'error' field must be a string")
        return cls(message)