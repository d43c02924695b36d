"""Images attached to generation and chat requests."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Image:
    """A base64-encoded image."""

    data: str

    @classmethod
    def from_base64(cls, data: str) -> Image:
        """Wrap an already base64-encoded image."""
        return cls(str(data))

    def to_json(self) -> str:
        """Return the value sent on the wire: the base64 string itself."""
        return self.data